"""Single-instance applications that raise their main window when contacted."""

from __future__ import annotations

import os
from typing import Protocol, runtime_checkable

from ukmedia.singlecoreapplication import SingleCoreApplication


@runtime_checkable
class ActivationWindow(Protocol):
    """The window operations used to bring an application to the front."""

    def unminimize(self) -> None: ...

    def raise_(self) -> None: ...

    def show_normal(self) -> None: ...

    def activate_window(self) -> None: ...


class SingleApplication(SingleCoreApplication):
    """A single-instance application with an optional activation window.

    When an activation window is set with activate_on_message true, every
    message from another instance first brings that window to the front and
    is then passed to the connected callbacks.
    """

    def __init__(self, app_id: str = "", temp_dir: str | os.PathLike[str] | None = None) -> None:
        super().__init__(app_id, temp_dir)
        self._window: ActivationWindow | None = None
        self._activate_on_message = False
        self._peer.connect(self._on_message)

    def _on_message(self, message: str) -> None:
        if self._activate_on_message:
            self.activate_window()

    def set_activation_window(self, window: ActivationWindow | None, activate_on_message: bool = True) -> None:
        """Set the window that activate_window() brings to the front."""
        self._window = window
        self._activate_on_message = activate_on_message

    def activation_window(self) -> ActivationWindow | None:
        return self._window

    def activate_window(self) -> None:
        """De-minimise, raise, show and activate the activation window, if any."""
        window = self._window
        if window is None:
            return
        window.unminimize()
        window.raise_()
        window.show_normal()
        window.activate_window()

    def initialize(self, dummy: bool = True) -> None:
        """Obsolete: equivalent to calling is_running()."""
        self.is_running()