"""
tudu - a terminal todo list.

Architecture:
- cursor, fuzzy, notification, bus: leaf building blocks
- components/: input-owning sub-components (task list, editor, finder, due date)
- controller.py: the mode state machine that applies intents from the bus
- storage.py: JSON persistence validated with jsonschema
- tui/: Textual screens and widgets that render the controller
- cli.py: command-line entry point
"""

__version__ = "0.1.0"
