"""Unit tests for the FileIdentifier class."""

import os

from trx.file_system_tree.file_identifier import FileIdentifier


def test_file_identifier():
    """Test the FileIdentifier class functionality."""
    id1 = FileIdentifier(123, 456)
    id2 = FileIdentifier(123, 456)
    id3 = FileIdentifier(789, 456)

    assert id1 == id2
    assert id1 != id3
    assert hash(id1) == hash(id2)
    assert len({id1, id2, id3}) == 2
    assert repr(id1) == "FileIdentifier(device_id=123, inode_number=456)"


def test_from_stat(tmp_path):
    stat_result = os.stat(tmp_path)
    identifier = FileIdentifier.from_stat(stat_result)
    assert identifier.device_id == stat_result.st_dev
    assert identifier.inode_number == stat_result.st_ino
    assert identifier == FileIdentifier.from_stat(os.stat(tmp_path))
