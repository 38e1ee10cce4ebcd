import multiprocessing

import pytest

from ukmedia.lockedfile import LockedFile, LockedFileError, LockMode


def _try_lock(path, mode_value, queue):
    with LockedFile(path).open("r+") as other:
        queue.put(other.lock(LockMode(mode_value), False))


def _lock_from_other_process(path, mode):
    ctx = multiprocessing.get_context("fork")
    queue = ctx.Queue()
    proc = ctx.Process(target=_try_lock, args=(str(path), int(mode), queue))
    proc.start()
    result = queue.get(timeout=10)
    proc.join(10)
    return result


def test_open_creates_file(tmp_path):
    path = tmp_path / "lock"
    with LockedFile(path).open("r+") as f:
        assert f.is_open
    assert path.exists()


def test_truncate_mode_refused(tmp_path):
    f = LockedFile(tmp_path / "lock")
    with pytest.raises(LockedFileError):
        f.open("w")
    assert not f.is_open


def test_unknown_mode_refused(tmp_path):
    with pytest.raises(ValueError):
        LockedFile(tmp_path / "lock").open("q")


def test_lock_requires_open_file(tmp_path):
    f = LockedFile(tmp_path / "lock")
    with pytest.raises(LockedFileError):
        f.lock(LockMode.WRITE_LOCK)
    with pytest.raises(LockedFileError):
        f.unlock()


def test_lock_mode_transitions(tmp_path):
    with LockedFile(tmp_path / "lock").open("r+") as f:
        assert f.lock_mode() is LockMode.NO_LOCK
        assert f.is_locked() is False
        assert f.lock(LockMode.WRITE_LOCK) is True
        assert f.lock_mode() is LockMode.WRITE_LOCK
        assert f.lock(LockMode.WRITE_LOCK) is True
        assert f.lock(LockMode.READ_LOCK) is True
        assert f.lock_mode() is LockMode.READ_LOCK
        assert f.lock(LockMode.NO_LOCK) is True
        assert f.is_locked() is False


def test_unlock_without_lock_succeeds(tmp_path):
    with LockedFile(tmp_path / "lock").open("r+") as f:
        assert f.unlock() is True
        assert f.lock_mode() is LockMode.NO_LOCK


def test_close_releases_lock(tmp_path):
    f = LockedFile(tmp_path / "lock").open("r+")
    f.lock(LockMode.WRITE_LOCK)
    f.close()
    assert f.is_open is False
    assert f.is_locked() is False


def test_file_readable_and_writable(tmp_path):
    path = tmp_path / "data"
    with LockedFile(path).open("r+") as f:
        f.lock(LockMode.WRITE_LOCK)
        f.file.write("hello")
    assert path.read_text() == "hello"


def test_write_lock_excludes_other_process(tmp_path):
    path = tmp_path / "lock"
    with LockedFile(path).open("r+") as f:
        assert f.lock(LockMode.WRITE_LOCK)
        assert _lock_from_other_process(path, LockMode.WRITE_LOCK) is False
        assert _lock_from_other_process(path, LockMode.READ_LOCK) is False


def test_read_locks_are_shared(tmp_path):
    path = tmp_path / "lock"
    with LockedFile(path).open("r+") as f:
        assert f.lock(LockMode.READ_LOCK)
        assert _lock_from_other_process(path, LockMode.READ_LOCK) is True
        assert _lock_from_other_process(path, LockMode.WRITE_LOCK) is False


def test_unlock_lets_other_process_lock(tmp_path):
    path = tmp_path / "lock"
    with LockedFile(path).open("r+") as f:
        f.lock(LockMode.WRITE_LOCK)
        f.unlock()
        assert _lock_from_other_process(path, LockMode.WRITE_LOCK) is True