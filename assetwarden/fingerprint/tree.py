"""Merkle-style content fingerprint of an asset tree."""

from __future__ import annotations

import fnmatch
import hashlib
import logging
import os
from collections import defaultdict
from pathlib import Path

from assetwarden.errors import HashComputeError
from assetwarden.fingerprint.models import FingerprintNode, FingerprintPolicy

logger = logging.getLogger(__name__)


def compute_hash(content: bytes) -> str:
    """Full SHA-256 hex digest."""
    return hashlib.sha256(content).hexdigest()


def compute_file_hash(path: Path, rel: str) -> str:
    """Hash a file's relative POSIX path together with its bytes.

    Including the path means a rename changes the fingerprint even when the
    content does not.
    """
    return compute_hash(rel.encode() + b"\0" + path.read_bytes())


def compute_merkle_hash(child_hashes: list[str]) -> str:
    """Compute a parent hash from sorted child hashes."""
    joined = "".join(sorted(child_hashes))
    return compute_hash(joined.encode())


def _reraise(err: OSError) -> None:
    """``os.walk`` error hook: a directory that cannot be listed aborts the walk."""
    raise err


def _included(name: str, include: tuple[str, ...]) -> bool:
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in include)


def _parent_key(rel: str) -> str:
    return rel.rsplit("/", 1)[0] if "/" in rel else ""


class FingerprintTree:
    """Hashes of every file and directory that counts toward a fingerprint."""

    def __init__(
        self,
        root_hash: str,
        nodes: dict[str, FingerprintNode],
        root_path: str = "",
    ) -> None:
        self.root_hash = root_hash
        self.nodes = nodes
        self.root_path = root_path

    @property
    def files(self) -> list[str]:
        """Relative paths of the hashed files, sorted."""
        return sorted(p for p, n in self.nodes.items() if not n.is_dir)

    @classmethod
    def build(cls, root_path: Path, policy: FingerprintPolicy | None = None) -> FingerprintTree:
        """Walk *root_path* and hash the files selected by *policy*.

        Files are leaves; each directory's hash is the Merkle hash of its
        children, and the root directory's hash is the tree fingerprint.
        Excluded directories are never entered. Any filesystem failure,
        including a subdirectory that cannot be listed, raises HashComputeError.
        """
        policy = policy or FingerprintPolicy()
        root_path = Path(root_path)

        nodes: dict[str, FingerprintNode] = {}
        # dir_path -> child relative paths
        children_map: dict[str, set[str]] = defaultdict(set)

        try:
            if not root_path.is_dir():
                raise NotADirectoryError(f"not a directory: {root_path}")
            root = root_path.resolve()

            for dirpath, dirnames, filenames in os.walk(root, onerror=_reraise):
                dirnames[:] = sorted(d for d in dirnames if d not in policy.exclude)
                base = Path(dirpath)
                for name in sorted(filenames):
                    p = base / name
                    if not _included(name, policy.include) or not p.is_file():
                        continue

                    rel = p.relative_to(root).as_posix()
                    nodes[rel] = FingerprintNode(path=rel, hash=compute_file_hash(p, rel))

                    # Link the file and every ancestor directory to its parent
                    child, parent = rel, _parent_key(rel)
                    while True:
                        children_map[parent].add(child)
                        if not parent:
                            break
                        child, parent = parent, _parent_key(parent)
        except OSError as e:
            raise HashComputeError(root_path, e) from e

        # Deepest directories first so child hashes exist before parents
        def _depth(d: str) -> int:
            return len(d.split("/")) if d else 0

        for dpath in sorted(children_map, key=_depth, reverse=True):
            child_paths = sorted(children_map[dpath])
            nodes[dpath] = FingerprintNode(
                path=dpath,
                hash=compute_merkle_hash([nodes[c].hash for c in child_paths]),
                children=tuple(child_paths),
            )

        root_hash = nodes[""].hash if "" in nodes else compute_hash(b"")
        return cls(root_hash=root_hash, nodes=nodes, root_path=str(root))


class DirectoryHasher:
    """Production fingerprint capability backed by :class:`FingerprintTree`."""

    def fingerprint(self, root: str | Path, policy: FingerprintPolicy) -> str:
        tree = FingerprintTree.build(Path(root), policy)
        logger.debug(
            "fingerprinted %s: %s (%d files)", tree.root_path, tree.root_hash, len(tree.files)
        )
        return tree.root_hash
