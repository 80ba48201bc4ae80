"""
Input-owning sub-components.

Each component handles raw key presses while its mode is active and
reports anything that needs the controller as an intent on the bus.
"""

from tudu.components.due_date import DueDatePicker, Month, TimePicker
from tudu.components.editor import TaskEditor
from tudu.components.finder import FuzzyFinder
from tudu.components.line_input import LineInput
from tudu.components.task_list import TaskListComponent

__all__ = [
    "DueDatePicker",
    "FuzzyFinder",
    "LineInput",
    "Month",
    "TaskEditor",
    "TaskListComponent",
    "TimePicker",
]
