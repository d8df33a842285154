import enum


class HabitStage(str, enum.Enum):
    """The four stages of the habit loop; also the bottleneck of a failure."""
    cue = "cue"
    craving = "craving"
    response = "response"
    reward = "reward"
