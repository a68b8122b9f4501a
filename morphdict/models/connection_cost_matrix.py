# Path: morphdict/models/connection_cost_matrix.py
"""
Connection Cost Matrix

Transition costs between right-context and left-context ids, stored
as little-endian i16 values: forward_size, backward_size, then
forward_size * backward_size costs in row-major order.

Loading is a direct reinterpretation of the bytes and never fails;
a short buffer simply yields a 0 x 0 matrix.
"""

import struct
from dataclasses import dataclass

COST_FORMAT = '<h'
COST_SIZE = struct.calcsize(COST_FORMAT)
HEADER_SIZE = 2 * COST_SIZE


@dataclass(frozen=True)
class ConnectionCostMatrix:
    """Row-major i16 cost table."""
    data: bytes

    @classmethod
    def load(cls, data: bytes) -> 'ConnectionCostMatrix':
        return cls(bytes(data))

    @property
    def forward_size(self) -> int:
        if len(self.data) < HEADER_SIZE:
            return 0
        return struct.unpack_from(COST_FORMAT, self.data, 0)[0]

    @property
    def backward_size(self) -> int:
        if len(self.data) < HEADER_SIZE:
            return 0
        return struct.unpack_from(COST_FORMAT, self.data, COST_SIZE)[0]

    def cost(self, forward_id: int, backward_id: int) -> int:
        """
        Transition cost from forward_id (right context of the previous
        node) to backward_id (left context of the next node).

        Raises:
            IndexError: If either id is outside the matrix
        """
        if not (0 <= forward_id < self.forward_size and 0 <= backward_id < self.backward_size):
            raise IndexError(
                f"context ids ({forward_id}, {backward_id}) outside "
                f"{self.forward_size}x{self.backward_size} matrix"
            )
        offset = HEADER_SIZE + (forward_id * self.backward_size + backward_id) * COST_SIZE
        if offset + COST_SIZE > len(self.data):
            raise IndexError(f"cost table truncated at offset {offset}")
        return struct.unpack_from(COST_FORMAT, self.data, offset)[0]

    @staticmethod
    def encode(costs: list[list[int]]) -> bytes:
        """Pack a forward x backward cost grid into the matrix layout."""
        forward_size = len(costs)
        backward_size = len(costs[0]) if costs else 0
        flat = [c for row in costs for c in row]
        return struct.pack(f'<hh{len(flat)}h', forward_size, backward_size, *flat)


__all__ = ['ConnectionCostMatrix']
