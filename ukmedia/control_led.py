"""Mirror the output and input mute state written to log files onto LEDs."""

from __future__ import annotations

import argparse
import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path

_log = logging.getLogger(__name__)

INPUT_LOG = "/tmp/kylin_input_muted.log"
OUTPUT_LOG = "/tmp/kylin_output_muted.log"
INPUT_LED = "/sys/class/leds/platform::micmute/brightness"
OUTPUT_LED = "/sys/class/leds/platform::volmute/brightness"

_Signature = tuple[int, int, int] | None


def led_brightness_for(text: str) -> int | None:
    """Return 1 for a muted state, 0 for an unmuted one, None if unknown."""
    if "mute" in text:
        return 1
    if "no" in text:
        return 0
    return None


def _signature(path: Path) -> _Signature:
    try:
        st = path.stat()
    except OSError:
        return None
    return (st.st_mtime_ns, st.st_size, st.st_ino)


class MediaControlLed:
    """Watches the two mute logs and sets the matching LED on each change.

    If either log is missing when the object is made, nothing is watched.
    """

    def __init__(
        self,
        input_log: str | os.PathLike[str] = INPUT_LOG,
        output_log: str | os.PathLike[str] = OUTPUT_LOG,
        input_led: str | os.PathLike[str] = INPUT_LED,
        output_led: str | os.PathLike[str] = OUTPUT_LED,
    ) -> None:
        self.input_log = Path(input_log)
        self.output_log = Path(output_log)
        self.input_led = Path(input_led)
        self.output_led = Path(output_led)
        self._watched: dict[Path, tuple[_Signature, Callable[[str], int | None]]] = {}
        if not self.output_log.exists() or not self.input_log.exists():
            return
        self._watched[self.input_log] = (_signature(self.input_log), self.on_input_file_changed)
        self._watched[self.output_log] = (_signature(self.output_log), self.on_output_file_changed)

    @property
    def watching(self) -> bool:
        return bool(self._watched)

    @staticmethod
    def _apply(log: Path, led: Path) -> int | None:
        try:
            text = log.read_text(errors="replace")
        except OSError:
            return None
        brightness = led_brightness_for(text)
        if brightness is None:
            return None
        _log.debug("%s: %s", log, "muted" if brightness else "unmuted")
        try:
            led.write_text(f"{brightness}\n")
        except OSError as exc:
            _log.warning("cannot set %s: %s", led, exc)
        return brightness

    def on_output_file_changed(self, path: str = "") -> int | None:
        """Update the output mute LED from the output log; return the brightness set."""
        return self._apply(self.output_log, self.output_led)

    def on_input_file_changed(self, path: str = "") -> int | None:
        """Update the microphone mute LED from the input log; return the brightness set."""
        return self._apply(self.input_log, self.input_led)

    def poll(self) -> list[str]:
        """Handle every watched log that changed since the last look; return their paths."""
        changed = []
        for path, (old, handler) in list(self._watched.items()):
            new = _signature(path)
            if new == old:
                continue
            self._watched[path] = (new, handler)
            handler(str(path))
            changed.append(str(path))
        return changed

    def watch(self, interval: float = 0.5, stop: threading.Event | None = None) -> None:
        """Poll every interval seconds until stop is set."""
        stop = stop if stop is not None else threading.Event()
        while True:
            self.poll()
            if stop.wait(interval):
                return


def _prepare_log(path: Path) -> None:
    try:
        path.touch()
        path.chmod(0o777)
    except OSError as exc:
        _log.warning("cannot prepare %s: %s", path, exc)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Drive mute LEDs from the mute state logs.")
    parser.add_argument("--input-log", default=INPUT_LOG)
    parser.add_argument("--output-log", default=OUTPUT_LOG)
    parser.add_argument("--input-led", default=INPUT_LED)
    parser.add_argument("--output-led", default=OUTPUT_LED)
    parser.add_argument("--interval", type=float, default=0.5)
    args = parser.parse_args(argv)

    _prepare_log(Path(args.output_log))
    _prepare_log(Path(args.input_log))
    control = MediaControlLed(args.input_log, args.output_log, args.input_led, args.output_led)
    try:
        control.watch(args.interval)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())