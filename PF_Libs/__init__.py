"""
PF_Libs - Photo Filter Studio Library Modules

This package contains core functionality for the Photo Filter Studio project,
organized into specialized sub-packages:

- AdjustLib: Adjustment parameters, undo/redo history and presets
- RenderLib: CSS filter operations, preview compositor and export engine
- SessionLib: Image acquisition rules and the edit session controller
- EditorLib: PyQt5 desktop editor window
"""

__version__ = "0.1.0"
