from .cutscene_action import (
    CutsceneAction,
    MoveEntityAction,
)
