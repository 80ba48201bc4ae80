"""
tudu TUI - Textual shell around the controller.

- app.py: TuduApp and TodoScreen; turns key presses and idle intervals into ticks
- widgets.py: panels rendering the controller's state with rich Text
"""
