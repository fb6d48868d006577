"""On-disk structures of a tiny file system.

Every structure is packed with no padding and stored little-endian.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

TTFS_MAGIC = b"TTFS"
FILE_NAME_MAX_LENGTH = 22
MAX_FILE_BLOCKS = 9
BLOCK_SIZE = 512
MAX_DIRECTORY_ENTRIES = BLOCK_SIZE // 4 - 1

_SUPER_BLOCK = struct.Struct("<4s7I")
_INODE = struct.Struct(f"<BB{FILE_NAME_MAX_LENGTH}sI{MAX_FILE_BLOCKS}I")
_DIRECTORY_BLOCK = struct.Struct(f"<I{MAX_DIRECTORY_ENTRIES}I")

SUPER_BLOCK_SIZE = _SUPER_BLOCK.size
INODE_SIZE = _INODE.size
DIRECTORY_BLOCK_SIZE = _DIRECTORY_BLOCK.size

_USED_BIT = 0x01
_DIRECTORY_BIT = 0x02


def _check_length(data: bytes, needed: int, what: str) -> None:
    if len(data) < needed:
        raise ValueError(f"{what} needs {needed} bytes, got {len(data)}")


@dataclass
class SuperBlock:
    """The first block of the file system, locating every other area."""

    inode_count: int = 0
    block_count: int = 0
    offset_to_inode_map: int = 0
    offset_to_block_map: int = 0
    offset_to_inode_table: int = 0
    offset_to_data_blocks: int = 0
    unused: int = 0

    def to_bytes(self) -> bytes:
        """Pack the super block, magic first."""
        return _SUPER_BLOCK.pack(
            TTFS_MAGIC,
            self.inode_count,
            self.block_count,
            self.offset_to_inode_map,
            self.offset_to_block_map,
            self.offset_to_inode_table,
            self.offset_to_data_blocks,
            self.unused,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> SuperBlock:
        """Unpack a super block; the data must begin with the magic."""
        _check_length(data, SUPER_BLOCK_SIZE, "super block")
        magic, *fields = _SUPER_BLOCK.unpack_from(data)
        if magic != TTFS_MAGIC:
            raise ValueError(f"bad magic {magic!r}")
        return cls(*fields)


@dataclass
class Inode:
    """Describes one file or directory and the data blocks it occupies."""

    file_name: str = ""
    is_used: bool = False
    is_directory: bool = False
    file_size: int = 0
    blocks: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.file_name.encode()) > FILE_NAME_MAX_LENGTH:
            raise ValueError(
                f"file name longer than {FILE_NAME_MAX_LENGTH} bytes: {self.file_name!r}"
            )
        if len(self.blocks) > MAX_FILE_BLOCKS:
            raise ValueError(f"an inode holds at most {MAX_FILE_BLOCKS} blocks")

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    def to_bytes(self) -> bytes:
        """Pack the inode; unused block slots are zero."""
        flags = (_USED_BIT if self.is_used else 0) | (
            _DIRECTORY_BIT if self.is_directory else 0
        )
        blocks = list(self.blocks) + [0] * (MAX_FILE_BLOCKS - len(self.blocks))
        return _INODE.pack(
            flags,
            len(self.blocks),
            self.file_name.encode(),
            self.file_size,
            *blocks,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> Inode:
        """Unpack an inode, keeping only the blocks its count names."""
        _check_length(data, INODE_SIZE, "inode")
        flags, block_count, raw_name, file_size, *blocks = _INODE.unpack_from(data)
        if block_count > MAX_FILE_BLOCKS:
            raise ValueError(f"block count {block_count} exceeds {MAX_FILE_BLOCKS}")
        return cls(
            file_name=raw_name.split(b"\0", 1)[0].decode(),
            is_used=bool(flags & _USED_BIT),
            is_directory=bool(flags & _DIRECTORY_BIT),
            file_size=file_size,
            blocks=blocks[:block_count],
        )


@dataclass
class DirectoryBlock:
    """A data block listing the inode numbers held by a directory."""

    inodes: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.inodes) > MAX_DIRECTORY_ENTRIES:
            raise ValueError(
                f"a directory block holds at most {MAX_DIRECTORY_ENTRIES} entries"
            )

    @property
    def entry_count(self) -> int:
        return len(self.inodes)

    def to_bytes(self) -> bytes:
        """Pack the directory block to exactly one block of bytes."""
        padded = list(self.inodes) + [0] * (MAX_DIRECTORY_ENTRIES - len(self.inodes))
        return _DIRECTORY_BLOCK.pack(len(self.inodes), *padded)

    @classmethod
    def from_bytes(cls, data: bytes) -> DirectoryBlock:
        """Unpack a directory block, keeping only the counted entries."""
        _check_length(data, DIRECTORY_BLOCK_SIZE, "directory block")
        entry_count, *entries = _DIRECTORY_BLOCK.unpack_from(data)
        if entry_count > MAX_DIRECTORY_ENTRIES:
            raise ValueError(
                f"entry count {entry_count} exceeds {MAX_DIRECTORY_ENTRIES}"
            )
        return cls(inodes=entries[:entry_count])