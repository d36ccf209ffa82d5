# Pipeline stages, in run order

from imgcheck.core.stages.locator import ExecutableLocatorStage
from imgcheck.core.stages.authenticator import AuthenticatorStage
from imgcheck.core.stages.inspector import PageInspectorStage
from imgcheck.core.stages.reporter import ReporterStage

__all__ = [
    "ExecutableLocatorStage",
    "AuthenticatorStage",
    "PageInspectorStage",
    "ReporterStage",
]
