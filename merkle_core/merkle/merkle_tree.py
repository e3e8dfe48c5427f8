"""
Merkle Tree Implementation
Power-of-two padded Merkle tree, inclusion proof generation and verification.

This module provides:
- Leaf materialization with padding to the next power of two
- Pairwise reduction of a digest level down to the root
- Proof generation for any padded leaf index
- Stateless proof verification

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = H(dumps_canonical(value).encode("utf-8"))
2. Parent hashing: parent = H(left + right)
3. Padding rule: extend the leaf list to next_power_of_two(n) (minimum 1)
   with H(default value), or a reserved sentinel digest when configured
4. Empty tree: a single padding leaf, which is also the root
5. Pairing is strictly sequential: 0 with 1, 2 with 3, ...

Direction Rule:
At each level the sibling of index i is i + 1 when i is even, else i - 1.
The step is LEFT when i > sibling (the sibling is combined first) and
RIGHT otherwise.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Iterable, Optional, Sequence, TypeVar

from merkle_core.config.runtime import (
    DEFAULT_PADDING_TAG,
    PaddingPolicy,
    get_default_config,
    parse_padding_policy,
)
from merkle_core.crypto.hashing import Hasher, get_hasher
from merkle_core.schemas.errors import ProofIndexOutOfRangeException, TreeInvariantError
from merkle_core.schemas.proof import Direction, MerkleProof, ProofStep


logger = logging.getLogger(__name__)

T = TypeVar("T")


def next_power_of_two(n: int) -> int:
    """
    Smallest power of two that is >= n, with a minimum of 1.

    Example:
        >>> [next_power_of_two(n) for n in (0, 1, 2, 3, 5, 8)]
        [1, 1, 2, 4, 8, 8]
    """
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def merkle_parents(level: Sequence[bytes], hasher: Hasher) -> list[bytes]:
    """
    Reduce one level of digests to the level above it.

    Adjacent digests are combined left to right, preserving order.

    Raises:
        TreeInvariantError: If the level is empty or has odd length
    """
    if len(level) == 0:
        raise TreeInvariantError("cannot reduce an empty digest level")
    if len(level) % 2 != 0:
        raise TreeInvariantError(
            f"cannot reduce a digest level of odd length {len(level)}"
        )

    return [
        hasher.combine(level[i], level[i + 1])
        for i in range(0, len(level), 2)
    ]


def reduce_to_root(leaves: Sequence[bytes], hasher: Hasher) -> bytes:
    """
    Fold a power-of-two list of digests down to a single root digest.

    Raises:
        TreeInvariantError: If any level other than the last has odd length,
            or the input is empty
    """
    if len(leaves) == 0:
        raise TreeInvariantError("cannot compute the root of zero leaves")

    level = list(leaves)
    while len(level) > 1:
        level = merkle_parents(level, hasher)

    return level[0]


def padding_digest(
    hasher: Hasher,
    policy: PaddingPolicy,
    default_factory: Callable[[], Any] = int,
    padding_tag: str = DEFAULT_PADDING_TAG,
) -> bytes:
    """Digest used for every padding leaf under the given policy."""
    if policy is PaddingPolicy.SENTINEL:
        return hasher.digest(padding_tag.encode("utf-8"))
    return hasher.hash_leaf(default_factory())


def materialize_leaves(
    values: Sequence[Any],
    hasher: Hasher,
    pad: bytes,
) -> list[bytes]:
    """
    Hash values into leaves and pad to the next power of two.

    Always returns next_power_of_two(len(values)) digests.
    """
    leaves = [hasher.hash_leaf(value) for value in values]
    leaves.extend([pad] * (next_power_of_two(len(values)) - len(values)))
    return leaves


class MerkleTree(Generic[T]):
    """
    Binary Merkle tree over an ordered list of values.

    The tree stores values, not digests; every read derives a fresh leaf
    list, so root() and get_proof() never depend on earlier calls.
    Values can only be appended.

    Example:
        >>> tree = MerkleTree([0, 1, 2, 3])
        >>> tree.append(4)
        >>> tree.padded_leaf_count
        8
        >>> proof = tree.get_proof(2)
        >>> verify_merkle_proof(proof)
        True
    """

    def __init__(
        self,
        values: Iterable[T] = (),
        *,
        default_factory: Callable[[], T] = int,
        hasher: Hasher | str | None = None,
        padding: PaddingPolicy | str | None = None,
    ) -> None:
        """
        Args:
            values: Initial leaf values; copied, so later changes to the
                caller's container do not affect the tree
            default_factory: Produces the default value hashed into padding
                leaves (0 for the int default)
            hasher: Hasher or registered hasher name; defaults to the
                runtime configuration
            padding: Padding policy; defaults to the runtime configuration
        """
        config = get_default_config()

        if hasher is None:
            hasher = config.hash.algorithm
        if isinstance(hasher, str):
            hasher = get_hasher(hasher)

        self._values: list[T] = list(values)
        self._default_factory = default_factory
        self._hasher: Hasher = hasher
        self._padding = parse_padding_policy(
            padding if padding is not None else config.tree.padding
        )
        self._padding_tag = config.tree.padding_tag

        logger.debug(
            "Built Merkle tree with %d values (hasher=%s, padding=%s)",
            len(self._values),
            self._hasher.name,
            self._padding.value,
        )

    @classmethod
    def from_values(cls, values: Iterable[T], **kwargs: Any) -> "MerkleTree[T]":
        """Construct a tree from an initial sequence of values."""
        return cls(values, **kwargs)

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def padding(self) -> PaddingPolicy:
        return self._padding

    @property
    def values(self) -> tuple[T, ...]:
        """Stored values, in insertion order (read-only snapshot)."""
        return tuple(self._values)

    @property
    def leaf_count(self) -> int:
        """Number of stored values, excluding padding."""
        return len(self._values)

    @property
    def padded_leaf_count(self) -> int:
        """Number of leaves after padding; valid proof indices are below this."""
        return next_power_of_two(len(self._values))

    @property
    def depth(self) -> int:
        """Number of levels above the leaves (length of every proof path)."""
        return self.padded_leaf_count.bit_length() - 1

    def __len__(self) -> int:
        return len(self._values)

    def append(self, value: T) -> None:
        """Add a value after the existing ones."""
        self._values.append(value)

    def padding_leaf(self) -> bytes:
        """Digest used for padding leaves in this tree."""
        return padding_digest(
            self._hasher,
            self._padding,
            self._default_factory,
            self._padding_tag,
        )

    def leaves(self) -> list[bytes]:
        """
        Return the leaf digests of the tree.

        Leaves are hashed values followed by padding digests; their number
        is always the smallest power of two >= the number of stored values
        (1 for an empty tree).
        """
        return materialize_leaves(self._values, self._hasher, self.padding_leaf())

    def root(self) -> bytes:
        """Compute the root digest over the current values."""
        return reduce_to_root(self.leaves(), self._hasher)

    def get_proof(self, index: int) -> MerkleProof:
        """
        Generate an inclusion proof for the leaf at a padded index.

        Indices past the stored values but below padded_leaf_count address
        padding leaves and are valid.

        Raises:
            ProofIndexOutOfRangeException: If index < 0 or
                index >= padded_leaf_count
        """
        level = self.leaves()
        if index < 0 or index >= len(level):
            raise ProofIndexOutOfRangeException(index, len(level))

        leaf = level[index]
        root = self.root()

        path: list[ProofStep] = []
        current = index
        while len(level) > 1:
            sibling = current + 1 if current % 2 == 0 else current - 1
            direction = Direction.LEFT if current > sibling else Direction.RIGHT
            path.append(ProofStep(direction=direction, value=level[sibling]))

            level = merkle_parents(level, self._hasher)
            current //= 2

        logger.debug(
            "Generated proof for leaf %d of %d (depth %d)",
            index,
            self.padded_leaf_count,
            len(path),
        )

        return MerkleProof(
            hash_algorithm=self._hasher.name,
            leaf=leaf,
            root=root,
            path=tuple(path),
        )

    @staticmethod
    def verify_proof(proof: MerkleProof, hasher: Optional[Hasher] = None) -> bool:
        """Verify a proof; same as verify_merkle_proof()."""
        return verify_merkle_proof(proof, hasher)


def compute_root(
    values: Iterable[Any],
    hasher: Hasher | str | None = None,
    padding: PaddingPolicy | str | None = None,
) -> bytes:
    """Root digest of a tree over values, without keeping the tree."""
    return MerkleTree(values, hasher=hasher, padding=padding).root()


def verify_merkle_proof(proof: MerkleProof, hasher: Optional[Hasher] = None) -> bool:
    """
    Verify a Merkle inclusion proof.

    Folds the path into an accumulator that starts at the leaf:
    LEFT steps compute H(sibling + acc), RIGHT steps H(acc + sibling).
    The proof is valid iff the result equals the recorded root.

    Args:
        proof: Proof to verify; not modified
        hasher: Hasher to use; by default the one named in the proof

    Returns:
        True if the proof is valid, False otherwise

    Raises:
        UnsupportedHashAlgorithmException: If no hasher is given and the
            proof names an unregistered algorithm
    """
    if hasher is None:
        hasher = get_hasher(proof.hash_algorithm)

    acc = proof.leaf
    for step in proof.path:
        if step.direction == Direction.LEFT:
            acc = hasher.combine(step.value, acc)
        else:
            acc = hasher.combine(acc, step.value)

    return acc == proof.root


__all__ = [
    "MerkleTree",
    "next_power_of_two",
    "merkle_parents",
    "reduce_to_root",
    "padding_digest",
    "materialize_leaves",
    "compute_root",
    "verify_merkle_proof",
]
