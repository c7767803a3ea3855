import subprocess
from typing import List

from rich import print as rprint

SRC_PATHS = ["mdspace", "tests", "devtools"]

LINT_COMMANDS = [
    ["usort", "format"],
    ["ruff", "check", "--fix"],
    ["black"],
]


def _run(cmd: List[str]) -> bool:
    rprint(f"[bold green]❯ {' '.join(cmd)}[/bold green]")
    try:
        subprocess.run(cmd, text=True, check=True)
        return True
    except subprocess.CalledProcessError as e:
        rprint(f"[bold red]Error: {e}[/bold red]")
        return False
    finally:
        rprint()


def main() -> int:
    failures = [cmd[0] for cmd in LINT_COMMANDS if not _run(cmd + SRC_PATHS)]

    if failures:
        rprint(f"[bold red]✗ Lint failed: {', '.join(failures)}[/bold red]")
    else:
        rprint("[bold green]✔️ Lint passed![/bold green]")
    rprint()

    return len(failures)


if __name__ == "__main__":
    exit(main())
