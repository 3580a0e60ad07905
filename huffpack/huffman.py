"""
Huffman code construction: symbol frequencies, the code tree and the
symbol <-> bit string tables derived from it.
"""

import heapq
import logging
from collections import Counter
from itertools import count
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class HuffmanNode:
    """
    Node of the Huffman tree.

    A leaf carries a byte ``symbol`` and its occurrence count as ``weight``.
    An internal node has ``symbol`` set to None, owns exactly two children and
    weighs the sum of them.
    """

    def __init__(self, symbol: Optional[int], weight: int, left=None, right=None):
        self.symbol = symbol
        self.weight = weight
        self.left = left
        self.right = right

    @property
    def is_leaf(self) -> bool:
        return self.symbol is not None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode(symbol={self.symbol}, weight={self.weight})"
        return f"HuffmanNode(weight={self.weight})"


def count_frequencies(data: bytes) -> Dict[int, int]:
    """
    Counts how often every byte value occurs in ``data``.

    Parameters:
    data (bytes): The input buffer, possibly empty.

    Returns:
    dict: symbol -> count, ascending by symbol, only symbols that occur.
    """
    freqs = Counter(data)
    return {symbol: freqs[symbol] for symbol in sorted(freqs)}


def build_tree(frequencies: Dict[int, int]) -> HuffmanNode:
    """
    Builds the Huffman tree by repeatedly merging the two lightest nodes.

    Ties are broken by insertion order: leaves enter in the order of
    ``frequencies``, merged nodes after them as they are created. The first
    node taken off the queue becomes the left child.

    Parameters:
    frequencies (dict): symbol -> count, at least one entry.

    Returns:
    HuffmanNode: The root. With a single symbol the root is that leaf.
    """
    if not frequencies:
        raise ValueError("Cannot build a Huffman tree without symbols.")

    sequence = count()
    priority_queue = [
        (weight, next(sequence), HuffmanNode(symbol, weight))
        for symbol, weight in frequencies.items()
    ]
    heapq.heapify(priority_queue)

    while len(priority_queue) > 1:
        left_weight, _, left = heapq.heappop(priority_queue)
        right_weight, _, right = heapq.heappop(priority_queue)
        merged = HuffmanNode(None, left_weight + right_weight, left, right)
        heapq.heappush(priority_queue, (merged.weight, next(sequence), merged))

    root = priority_queue[0][2]
    logger.debug("Built Huffman tree over %d symbols, root weight %d",
                 len(frequencies), root.weight)
    return root


def generate_codes(root: HuffmanNode) -> Dict[int, str]:
    """
    Walks the tree depth first and records the path to every leaf,
    '0' for a left turn and '1' for a right turn.

    A root that is itself a leaf gets the empty code.
    """
    codes = {}
    stack = [(root, "")]
    while stack:
        node, code = stack.pop()
        if node.is_leaf:
            codes[node.symbol] = code
            continue
        # right first so the left subtree is visited first
        stack.append((node.right, code + "1"))
        stack.append((node.left, code + "0"))
    return codes


def invert_codes(codes: Dict[int, str]) -> Dict[str, int]:
    """Returns the decoding table, bit string -> symbol."""
    return {code: symbol for symbol, code in codes.items()}


def _symbol_label(symbol: int, printable: bool) -> str:
    if not printable:
        return f"{symbol:3d}"
    char = chr(symbol)
    if char == "\n":
        return "'\\n'"
    if char.isprintable() and symbol < 128:
        return f"'{char}'"
    return f"'\\x{symbol:02x}'"


def render_tree(root: HuffmanNode, printable: bool = True) -> str:
    """
    Renders the tree as indented text, one node per line:

        |- 4
            |- 'a' 2  0
            |- 2
                |- 'b' 1  10
                |- 'c' 1  11

    Parameters:
    root (HuffmanNode): The tree to draw.
    printable (bool): Show symbols as characters instead of byte values.

    Returns:
    str: The drawing, without a trailing newline.
    """
    lines = []
    stack = [(root, 0, "")]
    while stack:
        node, depth, code = stack.pop()
        indent = "    " * depth
        if node.is_leaf:
            label = _symbol_label(node.symbol, printable)
            lines.append(f"{indent}|- {label} {node.weight}  {code}")
            continue
        lines.append(f"{indent}|- {node.weight}")
        stack.append((node.right, depth + 1, code + "1"))
        stack.append((node.left, depth + 1, code + "0"))
    return "\n".join(lines)
