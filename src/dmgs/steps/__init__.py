"""Build steps for the DMG pipeline."""

from dmgs.steps.base import BuildStep, StepSeverity, StepStatus
from dmgs.steps.validate import RemoveStaleOutputStep, ValidateStep
from dmgs.steps.volume import CreateImageStep, MountStep, PopulateStep, UnmountStep
from dmgs.steps.finder import CustomizeStep
from dmgs.steps.dmg import CleanupStep, ConvertStep
from dmgs.steps.icon import SetIconStep
from dmgs.steps.signing import SignStep

__all__ = [
    "BuildStep",
    "StepSeverity",
    "StepStatus",
    "ValidateStep",
    "RemoveStaleOutputStep",
    "CreateImageStep",
    "MountStep",
    "PopulateStep",
    "CustomizeStep",
    "UnmountStep",
    "ConvertStep",
    "SetIconStep",
    "SignStep",
    "CleanupStep",
]
