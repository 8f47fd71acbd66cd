"""Virtual file system types, message kinds and path normalisation."""

import enum
from dataclasses import dataclass

BUFFER_MAX = 8192
PATH_MAX = 4096


class VfsError(enum.IntEnum):
    """Error codes reported by the file system."""

    UNKNOWN = 1
    ENOTFOUND = 2
    EEXISTS = 3
    EACCESS = 4
    EIO = 5
    ENOMEM = 6
    ENOSPC = 7
    EINVAL = 8
    EISDIR = 9
    ENOTDIR = 10
    ENOTEMPTY = 11
    ELOOP = 12
    EBUSY = 13
    ENOSYS = 14


class NodeType(enum.IntEnum):
    UNKNOWN = 0
    FILE = 1
    DIRECTORY = 2
    SYMLINK = 3
    DEVICE = 4


class Mode(enum.IntFlag):
    """Permission bits in the usual owner/group/other layout."""

    OWNER_R = 0o400
    OWNER_W = 0o200
    OWNER_X = 0o100
    GROUP_R = 0o040
    GROUP_W = 0o020
    GROUP_X = 0o010
    OTHER_R = 0o004
    OTHER_W = 0o002
    OTHER_X = 0o001


class SeekWhence(enum.IntEnum):
    SET = 0
    CUR = 1
    END = 2


class MessageKind(enum.IntEnum):
    """Request and response kinds exchanged with a file system server."""

    UNKNOWN = 0

    LOOKUP = 1
    CREATE = 2
    LINK = 3
    UNLINK = 4
    RENAME = 5
    SYMLINK = 6
    READLINK = 7
    STAT = 8
    CHMOD = 9
    CHOWN = 10
    OPEN = 11

    CLOSE = 12
    READ = 13
    WRITE = 14
    SEEK = 15
    READDIR = 16
    TRUNCATE = 17
    FLUSH = 18

    MOUNT = 19
    UMOUNT = 20


@dataclass(frozen=True)
class Perms:
    uid: int
    gid: int
    mode: Mode


@dataclass(frozen=True)
class Stat:
    type: NodeType
    perms: Perms
    size: int
    ctime: int
    mtime: int
    atime: int


class PathTooLongError(ValueError):
    """A path does not fit in PATH_MAX characters."""


def normalize_path(path):
    """Return the canonical form of the absolute ``path``.

    Repeated slashes collapse, ``.`` components vanish, ``..`` removes the
    preceding component (never climbing above the root) and a trailing
    slash is dropped except for the root itself.
    """
    if not path:
        raise ValueError("path must not be empty")
    if path[0] != "/":
        raise ValueError(f"path must be absolute: {path!r}")
    if len(path) > PATH_MAX:
        raise PathTooLongError(f"path longer than {PATH_MAX} characters")

    out = []
    r = 0
    while r < len(path):
        if path[r] == "/":
            if not out or out[-1] != "/":
                if len(out) >= PATH_MAX - 1:
                    raise PathTooLongError("normalised path too long")
                out.append("/")
            r += 1
            continue

        start = r
        while r < len(path) and path[r] != "/":
            r += 1
        component = path[start:r]

        if component == ".":
            continue

        if component == "..":
            if len(out) > 1:
                out.pop()
                while len(out) > 1 and out[-1] != "/":
                    out.pop()
            continue

        if out[-1] != "/":
            if len(out) >= PATH_MAX - 1:
                raise PathTooLongError("normalised path too long")
            out.append("/")

        if len(out) + len(component) >= PATH_MAX:
            raise PathTooLongError("normalised path too long")
        out.extend(component)

    if len(out) > 1 and out[-1] == "/":
        out.pop()

    if not out:
        out.append("/")

    return "".join(out)