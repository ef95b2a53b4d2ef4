"""
File-backed byte sources and sinks for containers.
"""
import logging
import os
import stat
import tempfile

from pngcontainer import exceptions as exc
from pngcontainer import lexer
from pngcontainer import serializer


logger = logging.getLogger(__name__)


def read_container(path):
    """
    Read and parse the PNG file at ``path``.
    """
    try:
        with open(path, 'rb') as pngfile:
            data = pngfile.read()
    except OSError as e:
        raise exc.IoFailure('read', path) from e
    logger.info('Read %d bytes from %s', len(data), path)
    return lexer.parse(data)


def write_container(container, path, mode=serializer.CRCMode.verbatim,
                    atomic=True):
    """
    Serialize ``container`` to ``path``.

    With ``atomic`` set, the bytes go to a temporary file in the same
    directory which then replaces ``path``, so readers never observe a
    partial file. Otherwise ``path`` is written in place.
    """
    data = serializer.serialize(container, mode)
    if atomic:
        _replace_atomically(path, data)
    else:
        try:
            with open(path, 'wb') as pngfile:
                pngfile.write(data)
        except OSError as e:
            raise exc.IoFailure('write', path) from e
    logger.info('Wrote %d bytes to %s', len(data), path)
    return len(data)


def _replace_atomically(path, data):
    directory = os.path.dirname(os.path.abspath(path))
    try:
        fd, temp_path = tempfile.mkstemp(
            prefix='.pngcontainer-', suffix='.tmp', dir=directory)
    except OSError as e:
        raise exc.IoFailure('write', path) from e
    try:
        with os.fdopen(fd, 'wb') as tempfile_:
            tempfile_.write(data)
        os.chmod(temp_path, _target_mode(path))
        os.replace(temp_path, path)
    except OSError as e:
        try:
            os.unlink(temp_path)
        except FileNotFoundError:
            pass
        raise exc.IoFailure('write', path) from e


def _target_mode(path):
    """
    The permission bits a replacement for ``path`` should get: those of
    the existing file, or what a plain ``open`` would create.
    """
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
