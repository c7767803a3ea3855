"""
Immutable snapshot types for the workspace tree, history, and the views derived
from them. These hold no logic beyond small accessors.
"""
