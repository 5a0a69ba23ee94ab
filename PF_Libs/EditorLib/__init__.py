"""
EditorLib - Desktop editor window

PyQt5 window that maps sliders and buttons one-to-one onto
EditSession commands. Requires the optional `gui` dependencies.
"""
