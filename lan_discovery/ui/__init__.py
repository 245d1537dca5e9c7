"""
Terminal user interface: pure rendering and the curses surface.
"""
