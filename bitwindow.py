"""Backing storage, counters and growth policy of a bit data view.

The stored window is ``storage`` bits ``[shifted_bit_count, pushed_bit_count)``.
Invariant after every public call::

    0 <= shifted_bit_count <= pushed_bit_count <= bit_capacity <= len(storage) * 8
"""
import logging
from typing import Optional

from bitaddressing import BitAddressing, Storage, addressing_for
from bitnumbering import BitNumbering, BitNumberingMode
from endianness import Endianness
from errors import (
    BitRangeError,
    BitTypeError,
    CapacityError,
    check_uint,
    is_integer,
)

logger = logging.getLogger(__name__)

#: Largest bit capacity; native implementations address head/tail as uint32.
MAX_BIT_CAPACITY = 0xFFFFFFFE
#: Storage size of a view created without arguments.
DEFAULT_BYTE_SIZE = 64
#: Growth chunk used when a push or unshift runs out of room.
DEFAULT_EXPAND_BITS = 256 * 8


class BitWindow:
    """Growable bit storage with deque counters.

    :ivar endianness: Byte order used by multi-byte codec paths.
    :type endianness: Endianness
    :ivar bit_numbering: Significant-bit mode; changing it rebinds the
        addressing primitives immediately.
    :type bit_numbering: BitNumbering
    """

    def __init__(self, source=None, auto_expand: Optional[bool] = None):
        """Create the storage from ``source``.

        ``source`` may be:

        - ``None``: 64 zero bytes, auto-expanding;
        - a positive ``int``: that many bits of zeroed storage, fixed;
        - a ``bytearray``: wrapped by reference (zero-copy), fixed;
        - any other bytes-like object: copied into a new ``bytearray``, fixed.

        :param source: Initial storage description.
        :param auto_expand: Override the growth policy chosen above.
        :type auto_expand: Optional[bool]
        :raises BitTypeError: For a non-positive bit count or an unsupported
            ``source`` type.
        :raises BitRangeError: If the bit count exceeds ``MAX_BIT_CAPACITY``.
        """
        grow = False
        if source is None:
            data = bytearray(DEFAULT_BYTE_SIZE)
            limit = len(data) * 8
            grow = True
        elif is_integer(source):
            if source <= 0:
                raise BitTypeError("Required uint count of bits")
            check_uint(source, MAX_BIT_CAPACITY, "bit count")
            data = bytearray((source + 7) // 8)
            limit = source
        elif isinstance(source, bytearray):
            data = source
            limit = len(data) * 8
        else:
            try:
                data = bytearray(memoryview(source))
            except TypeError:
                raise BitTypeError(
                    f"Invalid source type: {type(source).__name__}"
                ) from None
            limit = len(data) * 8

        self._data: Storage = data
        self._limit = limit
        self._pushed = 0
        self._shifted = 0
        self._auto_expand = grow if auto_expand is None else bool(auto_expand)

        self._endianness = Endianness()
        self._addressing: BitAddressing = addressing_for(BitNumberingMode.LSB)
        self._bit_numbering = BitNumbering(on_change=self._bind_addressing)

    def _bind_addressing(self, mode: BitNumberingMode) -> None:
        self._addressing = addressing_for(mode)

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------

    @property
    def endianness(self) -> Endianness:
        """Byte order read by every multi-byte codec call."""
        return self._endianness

    @endianness.setter
    def endianness(self, value: Endianness) -> None:
        if not isinstance(value, Endianness):
            raise BitTypeError(
                f"endianness ({value!r}) must be an Endianness instance"
            )
        self._endianness = value

    @property
    def bit_numbering(self) -> BitNumbering:
        """Significant-bit mode; changing it rebinds the bit primitives."""
        return self._bit_numbering

    @bit_numbering.setter
    def bit_numbering(self, value: BitNumbering) -> None:
        """Adopt ``value`` and rebind the bit primitives to its mode.

        The previous object stops notifying this view.

        :param value: New bit numbering object.
        :type value: BitNumbering
        :raises BitTypeError: If ``value`` is not a ``BitNumbering``.
        """
        if not isinstance(value, BitNumbering):
            raise BitTypeError(
                f"bit_numbering ({value!r}) must be a BitNumbering instance"
            )
        if value is self._bit_numbering:
            return
        self._bit_numbering.on_change = None
        value.on_change = self._bind_addressing
        self._bit_numbering = value
        self._bind_addressing(value.get())

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def storage(self) -> Storage:
        """The backing bytes; replaced, not resized, when the view grows."""
        return self._data

    @property
    def bit_capacity(self) -> int:
        """Bits that can be pushed before the view has to grow."""
        return self._limit

    @property
    def pushed_bit_count(self) -> int:
        """Bit address one past the last stored bit."""
        return self._pushed

    @property
    def shifted_bit_count(self) -> int:
        """Bit address of the first stored bit."""
        return self._shifted

    @property
    def stored_bit_count(self) -> int:
        """Number of bits between the head and the tail."""
        return self._pushed - self._shifted

    def __len__(self) -> int:
        return self._pushed - self._shifted

    @property
    def auto_expand(self) -> bool:
        """Whether pushes and unshifts may grow the storage."""
        return self._auto_expand

    @auto_expand.setter
    def auto_expand(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise BitTypeError(f"auto_expand ({value!r}) must be bool")
        self._auto_expand = value

    def clear(self) -> None:
        """Forget the stored bits in O(1); storage bytes are left as-is."""
        self._pushed = 0
        self._shifted = 0

    def clone(self, deep: bool = False) -> "BitWindow":
        """Copy this view.

        With ``deep`` the storage and all three counters are copied as they
        are. Otherwise the copy shares memory with this view through a
        ``memoryview`` that starts at the first byte still holding stored
        bits; writes through either view are visible in both until one of
        them grows. While that ``memoryview`` is alive the underlying
        ``bytearray`` cannot be resized: a caller's buffer wrapped at
        construction raises ``BufferError`` on ``extend`` or ``del`` until
        the clone is released.

        :param deep: Copy storage instead of sharing it.
        :type deep: bool
        :returns: New view of the same class with the same modes.
        :rtype: BitWindow
        """
        copy = type(self)(auto_expand=self._auto_expand)
        if deep:
            copy._data = bytearray(self._data)
            copy._limit = self._limit
            copy._pushed = self._pushed
            copy._shifted = self._shifted
        else:
            skip = self._shifted >> 3
            copy._data = memoryview(self._data)[skip:]
            copy._limit = self._limit - skip * 8
            copy._pushed = self._pushed - skip * 8
            copy._shifted = self._shifted & 7
        copy.endianness.set(self.endianness.get())
        copy.bit_numbering.set(self.bit_numbering.get())
        return copy

    # ------------------------------------------------------------------
    # Growth
    # ------------------------------------------------------------------

    def available_bits_to_expand_right(self) -> int:
        """Bits ``expand_right`` may still add below the capacity ceiling."""
        return MAX_BIT_CAPACITY - self._limit

    def available_bits_to_push(self) -> int:
        """Bits that can still be pushed, counting growth when allowed.

        :rtype: int
        """
        if self._auto_expand:
            return MAX_BIT_CAPACITY - self._pushed
        return self._limit - self._pushed

    def available_bits_to_unshift(self) -> int:
        """Bits that can still be unshifted, counting growth when allowed.

        A fixed view can only reuse the bits already shifted out.

        :rtype: int
        """
        if self._auto_expand:
            return (MAX_BIT_CAPACITY - self._limit) // 8 * 8 + self._shifted
        return self._shifted

    def _check_push_room(self, count: int) -> None:
        check_uint(count, MAX_BIT_CAPACITY, "count")
        available = self.available_bits_to_push()
        if count <= available:
            return
        if not self._auto_expand:
            raise CapacityError(
                f"can't push {count} bits: capacity is fixed at "
                f"{self._limit} bits, {available} left"
            )
        raise BitRangeError(
            f"can't push {count} bits: {available} left below the ceiling"
        )

    def _check_unshift_room(self, count: int) -> None:
        check_uint(count, MAX_BIT_CAPACITY, "count")
        available = self.available_bits_to_unshift()
        if count <= available:
            return
        if not self._auto_expand:
            raise CapacityError(
                f"can't unshift {count} bits: only {available} shifted "
                f"bits to reuse"
            )
        raise BitRangeError(
            f"can't unshift {count} bits: {available} left below the ceiling"
        )

    def expand_right(self, bits: int = DEFAULT_EXPAND_BITS) -> None:
        """Add ``bits`` of capacity after the current storage.

        :param bits: Bits to add.
        :type bits: int
        :raises CapacityError: If the view does not auto-expand.
        :raises BitRangeError: If the capacity ceiling would be exceeded.
        """
        if not self._auto_expand:
            raise CapacityError(
                f"can't expand right by {bits} bits: capacity is fixed "
                f"at {self._limit} bits"
            )
        check_uint(bits, MAX_BIT_CAPACITY - self._limit, "expand bits")
        self._limit += bits
        data = bytearray((self._limit + 7) // 8)
        keep = min(len(self._data), len(data))
        data[:keep] = self._data[:keep]
        self._data = data
        logger.debug("expanded right by %d bits, capacity %d",
                     bits, self._limit)

    def expand_left(self, bits: int = DEFAULT_EXPAND_BITS) -> None:
        """Add ``bits`` of capacity before the current storage.

        Existing bytes are moved, not bit-shifted, so ``bits`` must be a
        multiple of 8. All three counters move by ``bits``.

        :param bits: Bits to add, multiple of 8.
        :type bits: int
        :raises CapacityError: If the view does not auto-expand.
        :raises BitRangeError: If ``bits`` is not byte aligned or the
            capacity ceiling would be exceeded.
        """
        if not self._auto_expand:
            raise CapacityError(
                f"can't expand left by {bits} bits: capacity is fixed "
                f"at {self._limit} bits"
            )
        check_uint(bits, MAX_BIT_CAPACITY - self._limit, "expand bits")
        if bits % 8:
            raise BitRangeError(
                f"expand_left only allows multiples of 8 bits, got {bits}"
            )
        offset = bits >> 3
        old = self._data[:(self._limit + 7) // 8]
        self._limit += bits
        self._pushed += bits
        self._shifted += bits
        data = bytearray((self._limit + 7) // 8)
        data[offset:offset + len(old)] = old
        self._data = data
        logger.debug("expanded left by %d bits, capacity %d",
                     bits, self._limit)

    def expand_right_if_needed(
        self, need: int, hint: int = DEFAULT_EXPAND_BITS
    ) -> None:
        """Make room for pushing ``need`` more bits.

        Grows by ``max(hint, need)``, clipped to the ceiling when the clipped
        amount still covers the shortfall.

        :param need: Bits about to be pushed.
        :type need: int
        :param hint: Preferred growth step.
        :type hint: int
        :raises BitTypeError: If ``need`` or ``hint`` is not an integer.
        :raises BitRangeError: If either exceeds ``MAX_BIT_CAPACITY``.
        """
        check_uint(need, MAX_BIT_CAPACITY, "need")
        check_uint(hint, MAX_BIT_CAPACITY, "hint")
        shortfall = self._pushed + need - self._limit
        if shortfall <= 0:
            return
        grow = max(hint, need)
        headroom = MAX_BIT_CAPACITY - self._limit
        if shortfall <= headroom < grow:
            grow = headroom
        self.expand_right(grow)

    def expand_left_if_needed(
        self, need: int, hint: int = DEFAULT_EXPAND_BITS
    ) -> None:
        """Make room for unshifting ``need`` more bits.

        Grows by ``max(hint, need)`` rounded up to whole bytes, clipped to
        the ceiling like :meth:`expand_right_if_needed`.

        :raises BitTypeError: If ``need`` or ``hint`` is not an integer.
        :raises BitRangeError: If either exceeds ``MAX_BIT_CAPACITY``.
        """
        check_uint(need, MAX_BIT_CAPACITY, "need")
        check_uint(hint, MAX_BIT_CAPACITY, "hint")
        shortfall = need - self._shifted
        if shortfall <= 0:
            return
        grow = (max(hint, need) + 7) // 8 * 8
        headroom = (MAX_BIT_CAPACITY - self._limit) // 8 * 8
        if shortfall <= headroom < grow:
            grow = headroom
        self.expand_left(grow)

    def push_nothing(self, count: int) -> None:
        """Reserve ``count`` bits at the tail without writing them.

        :raises CapacityError: If a fixed view has less than ``count`` bits
            of room.
        """
        self._check_push_room(count)
        self.expand_right_if_needed(count)
        self._pushed += count

    def shift_nothing(self, count: int) -> None:
        """Drop ``count`` bits from the head without reading them."""
        check_uint(count, self.stored_bit_count, "count")
        self._shifted += count

    # ------------------------------------------------------------------
    # Primitives. Indexes are relative to the front of the stored window.
    # ------------------------------------------------------------------

    def _set_bit_in_memory_unchecked(self, address: int, bit) -> None:
        if bit:
            self._addressing.set_bit(self._data, address)
        else:
            self._addressing.clear_bit(self._data, address)

    def _set_at_uint8_unchecked(self, index: int, count: int,
                                value: int) -> None:
        """Write the low ``count`` (0-8) bits of ``value``, bit 0 first."""
        set_bit, clear_bit, _ = self._addressing
        data = self._data
        address = self._shifted + index
        for _ in range(count):
            if value & 1:
                set_bit(data, address)
            else:
                clear_bit(data, address)
            value >>= 1
            address += 1

    def _get_at_uint8_unchecked(self, index: int, count: int) -> int:
        read_bit = self._addressing.read_bit
        data = self._data
        address = self._shifted + index
        value = 0
        for shift in range(count):
            value |= read_bit(data, address + shift) << shift
        return value

    def _set_at_bytes_unchecked(self, index: int, data,
                                count: Optional[int] = None,
                                reverse: bool = False) -> None:
        """Write ``count`` bits taken from ``data`` byte by byte.

        A final partial chunk takes the low bits of its byte. ``reverse``
        places the bytes of ``data`` last-to-first.
        """
        if count is None:
            count = len(data) * 8
        n = (count + 7) // 8
        for i in range(n):
            byte = data[n - 1 - i] if reverse else data[i]
            self._set_at_uint8_unchecked(
                index + i * 8, min(8, count - i * 8), byte
            )

    def _get_at_bytes_unchecked(self, index: int, count: int,
                                reverse: bool = False) -> bytes:
        n = (count + 7) // 8
        out = bytearray(n)
        for i in range(n):
            byte = self._get_at_uint8_unchecked(
                index + i * 8, min(8, count - i * 8)
            )
            out[n - 1 - i if reverse else i] = byte
        return bytes(out)

    # ------------------------------------------------------------------
    # Import / export / diagnostics
    # ------------------------------------------------------------------

    def import_bytes(self, data) -> None:
        """Replace the whole content with a copy of ``data``.

        The view becomes fixed-capacity and stores exactly
        ``len(data) * 8`` bits.

        :param data: Bytes-like object.
        :raises BitTypeError: If ``data`` is not bytes-like.
        """
        try:
            copy = bytearray(memoryview(data))
        except TypeError:
            raise BitTypeError(
                f"Invalid data type: {type(data).__name__}"
            ) from None
        self._data = copy
        self._limit = self._pushed = len(copy) * 8
        self._shifted = 0
        self._auto_expand = False
        logger.debug("imported %d bytes", len(copy))

    def export_bytes(self, reverse: bool = False) -> bytes:
        """Return the stored bits as new bytes, zero-padding the last byte.

        :param reverse: Reverse the byte order of the result.
        :type reverse: bool
        :rtype: bytes
        """
        return self._get_at_bytes_unchecked(0, self.stored_bit_count, reverse)

    def to_binary_string(self) -> str:
        """One ``'0'``/``'1'`` character per stored bit, front first."""
        read_bit = self._addressing.read_bit
        data = self._data
        return "".join(
            "1" if read_bit(data, address) else "0"
            for address in range(self._shifted, self._pushed)
        )

    def __str__(self) -> str:
        return (
            f"{type(self).__name__}(shifted_bit_count={self._shifted}, "
            f"pushed_bit_count={self._pushed}, "
            f"stored_bit_count={self.stored_bit_count}, "
            f"bit_capacity={self._limit})"
        )

    __repr__ = __str__
