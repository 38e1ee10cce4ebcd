"""File locking, single-instance messaging, custom sound records, mute-LED control and volume-control arithmetic."""

__version__ = "0.1.0"