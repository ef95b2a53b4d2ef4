# pylint: disable=no-self-use
import os
import stat

import pytest

from pngcontainer.tests.rawchunks import one_pixel_png


@pytest.fixture
def png_path(tmp_path):
    path = tmp_path / 'pixel.png'
    path.write_bytes(one_pixel_png)
    return str(path)


class TestReadContainer:
    def test_read(self, png_path):
        from pngcontainer.storage import read_container

        container = read_container(png_path)
        assert [chunk.type_tag for chunk in container] == [
            b'IHDR', b'IDAT', b'IEND']

    def test_missing_file(self, tmp_path):
        from pngcontainer.exceptions import IoFailure
        from pngcontainer.storage import read_container

        missing = str(tmp_path / 'missing.png')
        with pytest.raises(IoFailure) as excinfo:
            read_container(missing)
        assert excinfo.value.target == missing
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)


class TestWriteContainer:
    @pytest.mark.parametrize('atomic', [True, False])
    def test_copy(self, png_path, tmp_path, atomic):
        from pngcontainer.storage import read_container, write_container

        out = str(tmp_path / 'copy.png')
        written = write_container(read_container(png_path), out, atomic=atomic)
        with open(out, 'rb') as copy:
            assert copy.read() == one_pixel_png
        assert written == len(one_pixel_png)

    def test_atomic_leaves_no_temporary_files(self, png_path, tmp_path):
        from pngcontainer.storage import read_container, write_container

        write_container(read_container(png_path), png_path)
        assert sorted(os.listdir(str(tmp_path))) == ['pixel.png']

    def test_replaces_existing_file(self, png_path, tmp_path):
        from pngcontainer.serializer import CRCMode
        from pngcontainer.storage import read_container, write_container

        out = tmp_path / 'copy.png'
        out.write_bytes(b'old contents')
        write_container(read_container(png_path), str(out), CRCMode.recomputed)
        assert out.read_bytes() == one_pixel_png

    @pytest.mark.parametrize('atomic', [True, False])
    def test_unwritable_destination(self, png_path, tmp_path, atomic):
        from pngcontainer.exceptions import IoFailure
        from pngcontainer.storage import read_container, write_container

        out = str(tmp_path / 'no' / 'such' / 'dir' / 'copy.png')
        with pytest.raises(IoFailure) as excinfo:
            write_container(read_container(png_path), out, atomic=atomic)
        assert excinfo.value.operation == 'write'
        assert excinfo.value.target == out

    def test_atomic_new_file_mode_matches_plain_write(self, png_path, tmp_path):
        from pngcontainer.storage import read_container, write_container

        container = read_container(png_path)
        plain = str(tmp_path / 'plain.png')
        atomic = str(tmp_path / 'atomic.png')
        write_container(container, plain, atomic=False)
        write_container(container, atomic, atomic=True)
        assert (
            stat.S_IMODE(os.stat(atomic).st_mode) ==
            stat.S_IMODE(os.stat(plain).st_mode)
        )

    def test_atomic_keeps_existing_file_mode(self, png_path, tmp_path):
        from pngcontainer.storage import read_container, write_container

        out = tmp_path / 'shared.png'
        out.write_bytes(b'old contents')
        os.chmod(str(out), 0o640)
        write_container(read_container(png_path), str(out))
        assert stat.S_IMODE(os.stat(str(out)).st_mode) == 0o640
        assert out.read_bytes() == one_pixel_png
