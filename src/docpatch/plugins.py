from __future__ import annotations

import abc
import typing as t

if t.TYPE_CHECKING:
    from docpatch.application import Application

T = t.TypeVar("T")


class ApplicationPlugin(t.Generic[T], abc.ABC):
    """A plugin that is activated on application load, usually used to register additional CLI commands."""

    ENTRYPOINT = "docpatch.plugins.application"

    def __init__(self, app: Application) -> None:
        self.app = app

    @abc.abstractmethod
    def load_configuration(self, app: Application) -> T:
        """Load the configuration of the plugin. Use #Application.project to access the project configuration."""

    @abc.abstractmethod
    def activate(self, app: Application, config: T) -> None:
        """Activate the plugin, usually by registering a #Command to #Application.cleo."""
