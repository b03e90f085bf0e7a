import pytest

from simpledb.file import BlockId, FileManager, Page, max_length


# --- BlockId ---

def test_block_id_fields():
    bid = BlockId("test", 1)
    assert bid.filename == "test"
    assert bid.number == 1


def test_block_id_equals():
    assert BlockId("test", 1) == BlockId("test", 1)
    assert BlockId("test", 1) != BlockId("test", 2)
    assert BlockId("test", 1) != BlockId("other", 1)


def test_block_id_hashable():
    assert len({BlockId("test", 1), BlockId("test", 1), BlockId("test", 2)}) == 2


def test_block_id_str():
    assert str(BlockId("test", 1)) == "[file test, block 1]"


# --- Page ---

def test_new_page():
    page = Page(4096)
    assert len(page.contents) == 4096
    assert page.contents == bytearray(4096)


def test_page_from_bytes():
    data = bytes(range(16)) * 256
    page = Page.from_bytes(data)
    assert len(page.contents) == 4096
    assert bytes(page.contents) == data


def test_page_int():
    page = Page(4096)
    page.set_int(0, 42)
    assert page.get_int(0) == 42


def test_page_int_is_big_endian():
    page = Page(8)
    page.set_int(2, 1)
    assert bytes(page.contents) == b"\x00\x00\x00\x00\x00\x01\x00\x00"


def test_page_bytes():
    page = Page(4096)
    page.set_bytes(0, b"hello")
    assert page.get_bytes(0) == b"hello"


def test_page_string():
    page = Page(4096)
    page.set_string(0, "hello")
    assert page.get_string(0) == "hello"


def test_page_string_at_offset():
    page = Page(64)
    page.set_string(10, "world")
    assert page.get_int(10) == 5
    assert page.get_string(10) == "world"


def test_page_set_bytes_truncates_to_page():
    page = Page(6)
    page.set_bytes(0, b"hello")
    assert bytes(page.contents) == b"\x00\x00\x00\x05he"
    assert len(page.contents) == 6


def test_page_get_int_out_of_range():
    page = Page(6)
    with pytest.raises(IndexError):
        page.get_int(4)


def test_page_get_bytes_out_of_range():
    page = Page(8)
    page.set_int(0, 100)
    with pytest.raises(IndexError):
        page.get_bytes(0)


def test_max_length():
    assert max_length(1024) == 4 * 1024 + 4


# --- FileManager ---

def test_new_file_manager_new(tmp_path):
    db_dir = tmp_path / "db"
    fm = FileManager(db_dir, 4096)
    assert fm.db_dir == db_dir
    assert fm.block_size == 4096
    assert fm.is_new is True
    assert db_dir.is_dir()


def test_new_file_manager_existing(tmp_path):
    fm = FileManager(tmp_path, 4096)
    assert fm.is_new is False


def test_read(tmp_path):
    data = b"hello world!!!!"
    (tmp_path / "read_test").write_bytes(data)
    with FileManager(tmp_path, 4096) as fm:
        page = Page(len(data))
        fm.read(BlockId("read_test", 0), page)
        assert bytes(page.contents) == data


def test_read_past_end_leaves_page(tmp_path):
    (tmp_path / "short").write_bytes(b"abc")
    with FileManager(tmp_path, 8) as fm:
        page = Page(8)
        fm.read(BlockId("short", 0), page)
        assert bytes(page.contents) == b"abc\x00\x00\x00\x00\x00"


def test_write(tmp_path):
    with FileManager(tmp_path, 4096) as fm:
        page = Page(4096)
        page.set_string(0, "hello world!!!!")
        fm.write(BlockId("write_test", 0), page)
    assert (tmp_path / "write_test").read_bytes() == bytes(page.contents)


def test_write_second_block(tmp_path):
    with FileManager(tmp_path, 8) as fm:
        page = Page(8)
        page.set_int(0, 7)
        fm.write(BlockId("f", 1), page)
        read_back = Page(8)
        fm.read(BlockId("f", 1), read_back)
        assert read_back.get_int(0) == 7
    assert (tmp_path / "f").stat().st_size == 16


def test_append(tmp_path):
    (tmp_path / "append_test").write_bytes(b"")
    with FileManager(tmp_path, 4096) as fm:
        block = fm.append("append_test")
        assert block == BlockId("append_test", 0)
        assert fm.append("append_test") == BlockId("append_test", 1)
        assert fm.block_count("append_test") == 2
    assert (tmp_path / "append_test").stat().st_size == 2 * 4096


def test_block_count_partial_block(tmp_path):
    (tmp_path / "partial").write_bytes(b"hello world!!")
    with FileManager(tmp_path, 5) as fm:
        assert fm.block_count("partial") == 3


def test_block_count_new_file(tmp_path):
    with FileManager(tmp_path, 5) as fm:
        assert fm.block_count("fresh") == 0
    assert (tmp_path / "fresh").exists()