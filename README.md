# ukmedia

Support code for a desktop volume-control applet. It runs on POSIX systems only, because it uses `fcntl` locks, Unix sockets and `os.getuid`.

- `ukmedia.lockedfile`: `LockedFile` gives advisory read and write locks on a file. The module also defines `LockMode` (`NO_LOCK`, `READ_LOCK`, `WRITE_LOCK`) and `LockedFileError`.
- `ukmedia.localpeer`: `LocalPeer` implements the single-instance protocol. It uses a lock file plus a Unix socket, and sends length-prefixed UTF-8 messages that the receiver answers with `ack`. The module also has the helpers `checksum16` and `make_socket_name`.
- `ukmedia.singlecoreapplication`: `SingleCoreApplication` offers `is_running`, `send_message`, `id`, `connect`, `process_events` and `close`.
- `ukmedia.singleapplication`: `SingleApplication` extends `SingleCoreApplication` with an activation window, which must satisfy the `ActivationWindow` protocol. When a message arrives, that window can be brought to the front.
- `ukmedia.custom_sound`: `CustomSound` keeps a small XML file that records which custom sounds have been registered. The default file is `~/.config/customAudio.xml`. The module also has `normalize_node_name`.
- `ukmedia.control_led`: `MediaControlLed` watches the output and input mute log files and sets the mute LEDs to match. The module also has `led_brightness_for` and the `ukmedia-control-led` command.
- `ukmedia.volume_controls`: slider value mapping, slider tip text, on-screen-display geometry, and key and wheel handling.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Locked files

```python
from ukmedia.lockedfile import LockedFile, LockMode

with LockedFile("/tmp/example.lock").open("r+") as f:
    if f.lock(LockMode.WRITE_LOCK, block=False):
        print("holding the write lock")
```

`open` refuses truncating (`"w"`) modes. `lock` returns `False` when `block` is false and another process holds a conflicting lock.

## Single instance

```python
from ukmedia.singleapplication import SingleApplication

app = SingleApplication("ukui-volume-control-applet")
if app.is_running():
    app.send_message("raise_window_noop")
else:
    app.connect(lambda message: print("received", message))
    while True:
        app.process_events(1000)   # wait up to 1000 ms for one message
```

How it works:

- The first instance to call `is_running()` takes the write lock on the lock file and starts listening on the socket.
- Later instances get `True` back from `is_running()`.
- `send_message` takes a timeout in milliseconds. It returns `True` only if the running instance acknowledged the message.
- `process_events` returns the received message, or `None`.

`set_activation_window(window, activate_on_message=True)` takes a window with `unminimize`, `raise_`, `show_normal` and `activate_window` methods. Once it is set, every incoming message calls those four methods in that order.

## Custom sounds

```python
from ukmedia.custom_sound import CustomSound

store = CustomSound("/tmp/customAudio.xml")
store.create_audio_file()
if not store.is_exist("My Sound (1)"):
    store.add_xml_node("My Sound (1)", True)
```

How sound names are stored:

- Spaces, `/`, `(` and `)` are removed from sound names.
- Names that then start with a digit get the prefix `Audio_`.
- A name with nothing left after this raises `ValueError`.

`add_xml_node` sets the `firstRun` marker to `false`.

`is_first_run` returns `True` only when the first element in the file is named `first-run` and its first child holds `true`. The file that `create_audio_file` writes names its marker `firstRun`, so for such files `is_first_run` returns `False`.

## Mute LEDs

```
ukmedia-control-led
```

The command first creates the log files if they are missing and sets their mode to 0777. It then checks both files every `--interval` seconds (default 0.5). When one of them changes, it writes to the matching LED's brightness file:

- `1` when the log contains `mute`;
- otherwise `0` when the log contains `no`.

If either log file is missing when watching starts, nothing is watched.

Options:

| Option | Default |
|---|---|
| `--input-log` | `/tmp/kylin_input_muted.log` |
| `--output-log` | `/tmp/kylin_output_muted.log` |
| `--input-led` | `/sys/class/leds/platform::micmute/brightness` |
| `--output-led` | `/sys/class/leds/platform::volmute/brightness` |
| `--interval` | `0.5` |

## Volume helpers

```python
from ukmedia.volume_controls import slider_drag_value, tip_text, osd_geometry, key_volume_gain, Key

value = slider_drag_value(110, 220, 0, 100)
print(tip_text(value))             # "50%"
print(osd_geometry(1920, 1080))    # OsdGeometry(size=..., margin=..., icon_size=..., x=..., y=..., corner_radius=...)
print(key_volume_gain(Key.UP))     # 1
```

- `slider_click_value` gives the value a slider jumps to when it is pressed at a pixel position.
- `wheel_step` turns a wheel delta into `True` (up), `False` (down) or `None` (no movement).
- `DisplayMode` and `SwitchButtonState` name the applet's window modes and the states of its switch button.

## What this package does not do

- It has no graphical interface: no slider widget, mini window or on-screen display is drawn.
- It does not talk to a sound server, so it cannot read or change actual volume or mute state.
- The volume helpers only compute values and geometry.