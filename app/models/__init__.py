from .stage import HabitStage
from .user import User
from .habit import Habit
from .completion import Completion
from .reflection import Reflection, ReflectionTactic
from .tactic import Tactic

__all__ = [
    "HabitStage",
    "User",
    "Habit",
    "Completion",
    "Reflection",
    "ReflectionTactic",
    "Tactic",
]
