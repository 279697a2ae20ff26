"""Bit-addressed DataView with deque operations.

Every value type has the same eight public operations::

    set_at_T / get_at_T        offset counted from the front of the window
    set_until_T / get_until_T  offset counted back from the end of the window
    push_T / pop_T             write / read at the tail
    unshift_T / shift_T        write / read at the head

Public methods validate every argument and raise
:class:`errors.BitTypeError` or :class:`errors.BitRangeError` before touching
any state. Each one then delegates to a ``_..._unchecked`` method that does no
validation at all. The unchecked layer is what the codec composes internally
and what hot loops may call directly; passing it invalid widths, offsets or
values is undefined behaviour (silent wraparound, ``IndexError`` or corrupted
counters), never a reported error.

With LSB bit numbering and little-endian byte order the produced bytes are
identical to the native C BitDataView and, for byte-aligned fields, to
``struct`` little-endian packing.
"""
import struct
from numbers import Real
from typing import Callable, Optional

from bitwindow import MAX_BIT_CAPACITY, BitWindow
from errors import BitRangeError, BitTypeError, check_int, check_uint

#: Widest ``uint``/``int`` field, the exact-integer range of an IEEE double.
MAX_UINT_BITS = 53
#: Widest ``big_uint``/``big_int`` field.
MAX_BIG_BITS = 64

Setter = Callable[[int, int, object], None]
Getter = Callable[[int, int], object]


class BitDataView(BitWindow):
    """Bit-addressable buffer and double-ended bit queue.

    Construction arguments are those of :class:`bitwindow.BitWindow`.

    Example::

        view = BitDataView()
        view.push_uint(3, 5)
        view.push_int(12, -100)
        assert view.shift_uint(3) == 5
        assert view.shift_int(12) == -100
    """

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------

    def _check_width(self, width, min_width: int, max_width: int) -> int:
        return check_int(width, min_width, max_width, "width")

    def _check_index(self, index, width: int) -> int:
        return check_int(index, 0, self.stored_bit_count - width, "index")

    def _check_stored(self, width: int) -> None:
        if width > self.stored_bit_count:
            raise BitRangeError(
                f"not enough bits: {width} requested, "
                f"{self.stored_bit_count} stored"
            )

    @staticmethod
    def _check_bit(value) -> int:
        if isinstance(value, bool):
            return int(value)
        return check_uint(value, 1, "bit")

    @staticmethod
    def _check_uint_value(value, width: int) -> int:
        return check_uint(value, (1 << width) - 1)

    @staticmethod
    def _check_int_value(value, width: int) -> int:
        return check_int(value, -(1 << (width - 1)), (1 << (width - 1)) - 1)

    @staticmethod
    def _check_float(value, fmt: str) -> float:
        if not isinstance(value, Real) or isinstance(value, bool):
            raise BitTypeError(f"value ({value!r}) must be a real number")
        try:
            struct.pack(fmt, value)
        except (OverflowError, struct.error):
            raise BitRangeError(
                f"value ({value}) does not fit {struct.calcsize(fmt) * 8} "
                f"bit float"
            ) from None
        return value

    def _check_block(self, data, width):
        """Validate a byte block and its bit width; returns the width."""
        try:
            size = memoryview(data).nbytes
        except TypeError:
            raise BitTypeError(
                f"data ({type(data).__name__}) must be bytes-like"
            ) from None
        if width is None:
            width = size * 8
        check_uint(width, MAX_BIT_CAPACITY, "width")
        if (width + 7) // 8 != size:
            raise BitRangeError(
                f"width ({width}) does not match {size} bytes of data"
            )
        return width

    def _check_block_read(self, width):
        if width is None:
            return self.stored_bit_count
        return check_uint(width, MAX_BIT_CAPACITY, "width")

    @staticmethod
    def _as_bytes(data) -> bytes:
        return memoryview(data).cast("B").tobytes()

    def _until(self, index: int, width: int) -> int:
        """Translate an offset from the end into an offset from the front."""
        return self._pushed - self._shifted - width - index

    # ------------------------------------------------------------------
    # Unchecked codec. ``index`` is relative to the window front.
    # ------------------------------------------------------------------

    def _set_at_bit_unchecked(self, index: int, width: int, value) -> None:
        self._set_bit_in_memory_unchecked(self._shifted + index, value)

    def _get_at_bit_unchecked(self, index: int, width: int = 1) -> bool:
        return bool(
            self._addressing.read_bit(self._data, self._shifted + index)
        )

    def _set_at_uint_unchecked(self, index: int, width: int,
                               value: int) -> None:
        """Write an unsigned field in the active byte order.

        Little-endian places the low byte at the lowest address.
        Big-endian places the low byte at the highest address, so a width
        that is not a multiple of 8 leaves its short chunk (the high bits)
        at the lowest address.
        """
        if self.endianness.is_little_endian():
            while width > 0:
                chunk = min(width, 8)
                self._set_at_uint8_unchecked(index, chunk, value & 0xFF)
                value >>= 8
                width -= 8
                index += 8
        else:
            while width > 0:
                chunk = min(width, 8)
                self._set_at_uint8_unchecked(
                    index + width - chunk, chunk, value & 0xFF
                )
                value >>= 8
                width -= 8

    def _get_at_uint_unchecked(self, index: int, width: int) -> int:
        result = 0
        if self.endianness.is_little_endian():
            shift = 0
            while width > 0:
                chunk = min(width, 8)
                result |= self._get_at_uint8_unchecked(index, chunk) << shift
                shift += 8
                width -= 8
                index += 8
        else:
            chunk = width % 8 or 8
            while width > 0:
                result = (result << chunk) | self._get_at_uint8_unchecked(
                    index, chunk
                )
                index += chunk
                width -= chunk
                chunk = 8
        return result

    def _set_at_int_unchecked(self, index: int, width: int,
                              value: int) -> None:
        self._set_at_uint_unchecked(index, width, value & ((1 << width) - 1))

    def _get_at_int_unchecked(self, index: int, width: int) -> int:
        result = self._get_at_uint_unchecked(index, width)
        if (result >> (width - 1)) & 1:
            result -= 1 << width
        return result

    def _set_at_big_uint_unchecked(self, index: int, width: int,
                                   value: int) -> None:
        if width == 64:
            scratch = struct.pack(self.endianness.struct_prefix() + "Q", value)
            self._set_at_bytes_unchecked(index, scratch)
        else:
            self._set_at_uint_unchecked(index, width, value)

    def _get_at_big_uint_unchecked(self, index: int, width: int) -> int:
        if width == 64:
            scratch = self._get_at_bytes_unchecked(index, 64)
            return struct.unpack(
                self.endianness.struct_prefix() + "Q", scratch
            )[0]
        return self._get_at_uint_unchecked(index, width)

    def _set_at_big_int_unchecked(self, index: int, width: int,
                                  value: int) -> None:
        if width == 64:
            scratch = struct.pack(self.endianness.struct_prefix() + "q", value)
            self._set_at_bytes_unchecked(index, scratch)
        else:
            self._set_at_int_unchecked(index, width, value)

    def _get_at_big_int_unchecked(self, index: int, width: int) -> int:
        if width == 64:
            scratch = self._get_at_bytes_unchecked(index, 64)
            return struct.unpack(
                self.endianness.struct_prefix() + "q", scratch
            )[0]
        return self._get_at_int_unchecked(index, width)

    def _set_at_float32_unchecked(self, index: int, width: int,
                                  value: float) -> None:
        scratch = struct.pack(self.endianness.struct_prefix() + "f", value)
        self._set_at_bytes_unchecked(index, scratch)

    def _get_at_float32_unchecked(self, index: int, width: int = 32) -> float:
        scratch = self._get_at_bytes_unchecked(index, 32)
        return struct.unpack(self.endianness.struct_prefix() + "f", scratch)[0]

    def _set_at_float64_unchecked(self, index: int, width: int,
                                  value: float) -> None:
        scratch = struct.pack(self.endianness.struct_prefix() + "d", value)
        self._set_at_bytes_unchecked(index, scratch)

    def _get_at_float64_unchecked(self, index: int, width: int = 64) -> float:
        scratch = self._get_at_bytes_unchecked(index, 64)
        return struct.unpack(self.endianness.struct_prefix() + "d", scratch)[0]

    # ------------------------------------------------------------------
    # Unchecked deque moves shared by every value type
    # ------------------------------------------------------------------

    def _push_unchecked(self, set_at: Setter, width: int, value) -> None:
        self._pushed += width
        set_at(self._pushed - self._shifted - width, width, value)

    def _unshift_unchecked(self, set_at: Setter, width: int, value) -> None:
        self._shifted -= width
        set_at(0, width, value)

    def _shift_unchecked(self, get_at: Getter, width: int):
        value = get_at(0, width)
        self._shifted += width
        return value

    def _pop_unchecked(self, get_at: Getter, width: int):
        value = get_at(self._pushed - self._shifted - width, width)
        self._pushed -= width
        return value

    # ------------------------------------------------------------------
    # Bit
    # ------------------------------------------------------------------

    def set_at_bit(self, index: int, value) -> None:
        """Set the bit ``index`` bits after the front to ``value``.

        :param index: Offset from the front of the stored window.
        :type index: int
        :param value: ``True``/``False`` or ``0``/``1``.
        :raises BitTypeError: If ``index`` is not an integer.
        :raises BitRangeError: If ``index`` is outside the stored window or
            ``value`` is not a bit.
        """
        self._check_index(index, 1)
        value = self._check_bit(value)
        self._set_at_bit_unchecked(index, 1, value)

    def set_until_bit(self, index: int, value) -> None:
        """Set the bit ``index`` bits before the end of the window."""
        self._check_index(index, 1)
        value = self._check_bit(value)
        self._set_at_bit_unchecked(self._until(index, 1), 1, value)

    def get_at_bit(self, index: int) -> bool:
        """Read the bit ``index`` bits after the front."""
        self._check_index(index, 1)
        return self._get_at_bit_unchecked(index)

    def get_until_bit(self, index: int) -> bool:
        """Read the bit ``index`` bits before the end."""
        self._check_index(index, 1)
        return self._get_at_bit_unchecked(self._until(index, 1))

    def push_bit(self, value) -> None:
        """Append one bit at the tail."""
        value = self._check_bit(value)
        self._check_push_room(1)
        self.expand_right_if_needed(1)
        self._push_unchecked(self._set_at_bit_unchecked, 1, value)

    def push_bits(self, value, count: int = 1) -> None:
        """Append ``count`` copies of the bit ``value``.

        :param value: Bit to repeat.
        :param count: Number of copies, 0 allowed.
        :type count: int
        """
        value = self._check_bit(value)
        self._check_push_room(count)
        self.expand_right_if_needed(count)
        start = self._pushed
        self._pushed += count
        for address in range(start, start + count):
            self._set_bit_in_memory_unchecked(address, value)

    def unshift_bit(self, value) -> None:
        """Prepend one bit at the head."""
        value = self._check_bit(value)
        self._check_unshift_room(1)
        self.expand_left_if_needed(1)
        self._unshift_unchecked(self._set_at_bit_unchecked, 1, value)

    def shift_bit(self) -> bool:
        """Remove and return the first stored bit."""
        self._check_stored(1)
        return self._shift_unchecked(self._get_at_bit_unchecked, 1)

    def pop_bit(self) -> bool:
        """Remove and return the last stored bit."""
        self._check_stored(1)
        return self._pop_unchecked(self._get_at_bit_unchecked, 1)

    # ------------------------------------------------------------------
    # Byte: 0 to 8 bits, no byte order involved
    # ------------------------------------------------------------------

    def _set_at_byte_unchecked(self, index: int, width: int,
                               value: int) -> None:
        self._set_at_uint8_unchecked(index, width, value)

    def _get_at_byte_unchecked(self, index: int, width: int) -> int:
        return self._get_at_uint8_unchecked(index, width)

    def set_at_byte(self, index: int, width: int, value: int) -> None:
        """Write the low ``width`` bits of a byte at ``index``."""
        self._check_width(width, 0, 8)
        self._check_index(index, width)
        self._check_uint_value(value, width)
        self._set_at_byte_unchecked(index, width, value)

    def set_until_byte(self, index: int, width: int, value: int) -> None:
        """Write a ``width``-bit byte ending ``index`` bits before the end."""
        self._check_width(width, 0, 8)
        self._check_index(index, width)
        self._check_uint_value(value, width)
        self._set_at_byte_unchecked(self._until(index, width), width, value)

    def get_at_byte(self, index: int, width: int = 8) -> int:
        """Read a byte of up to 8 bits at ``index``."""
        self._check_width(width, 0, 8)
        self._check_index(index, width)
        return self._get_at_byte_unchecked(index, width)

    def get_until_byte(self, index: int, width: int = 8) -> int:
        """Read a byte of up to 8 bits ending ``index`` bits before the end."""
        self._check_width(width, 0, 8)
        self._check_index(index, width)
        return self._get_at_byte_unchecked(self._until(index, width), width)

    def push_byte(self, width: int, value: int) -> None:
        """Append a byte of up to 8 bits."""
        self._check_width(width, 0, 8)
        self._check_uint_value(value, width)
        self._check_push_room(width)
        self.expand_right_if_needed(width)
        self._push_unchecked(self._set_at_byte_unchecked, width, value)

    def unshift_byte(self, width: int, value: int) -> None:
        """Prepend a byte of up to 8 bits."""
        self._check_width(width, 0, 8)
        self._check_uint_value(value, width)
        self._check_unshift_room(width)
        self.expand_left_if_needed(width)
        self._unshift_unchecked(self._set_at_byte_unchecked, width, value)

    def shift_byte(self, width: int = 8) -> int:
        """Remove and return a byte of up to 8 bits from the head."""
        self._check_width(width, 0, 8)
        self._check_stored(width)
        return self._shift_unchecked(self._get_at_byte_unchecked, width)

    def pop_byte(self, width: int = 8) -> int:
        """Remove and return a byte of up to 8 bits from the tail."""
        self._check_width(width, 0, 8)
        self._check_stored(width)
        return self._pop_unchecked(self._get_at_byte_unchecked, width)

    # ------------------------------------------------------------------
    # Uint: 0 to 53 bits
    # ------------------------------------------------------------------

    def set_at_uint(self, index: int, width: int, value: int) -> None:
        """Write an unsigned ``width``-bit integer at ``index``.

        :param index: Offset from the front of the stored window.
        :type index: int
        :param width: Field width, 0 to 53 bits.
        :type width: int
        :param value: ``0 <= value < 2 ** width``.
        :type value: int
        :raises BitTypeError: If an argument is not an integer.
        :raises BitRangeError: If an argument is out of range.
        """
        self._check_width(width, 0, MAX_UINT_BITS)
        self._check_index(index, width)
        self._check_uint_value(value, width)
        self._set_at_uint_unchecked(index, width, value)

    def set_until_uint(self, index: int, width: int, value: int) -> None:
        """Write an unsigned integer ending ``index`` bits before the end."""
        self._check_width(width, 0, MAX_UINT_BITS)
        self._check_index(index, width)
        self._check_uint_value(value, width)
        self._set_at_uint_unchecked(self._until(index, width), width, value)

    def get_at_uint(self, index: int, width: int) -> int:
        """Read an unsigned ``width``-bit integer at ``index``.

        :param index: Offset from the front of the stored window.
        :type index: int
        :param width: Field width, 0 to 53 bits.
        :type width: int
        :rtype: int
        """
        self._check_width(width, 0, MAX_UINT_BITS)
        self._check_index(index, width)
        return self._get_at_uint_unchecked(index, width)

    def get_until_uint(self, index: int, width: int) -> int:
        """Read an unsigned integer ending ``index`` bits before the end."""
        self._check_width(width, 0, MAX_UINT_BITS)
        self._check_index(index, width)
        return self._get_at_uint_unchecked(self._until(index, width), width)

    def push_uint(self, width: int, value: int) -> None:
        """Append an unsigned ``width``-bit integer, growing if allowed.

        :raises CapacityError: If a fixed view has no room left.
        """
        self._check_width(width, 0, MAX_UINT_BITS)
        self._check_uint_value(value, width)
        self._check_push_room(width)
        self.expand_right_if_needed(width)
        self._push_unchecked(self._set_at_uint_unchecked, width, value)

    def unshift_uint(self, width: int, value: int) -> None:
        """Prepend an unsigned ``width``-bit integer, growing if allowed."""
        self._check_width(width, 0, MAX_UINT_BITS)
        self._check_uint_value(value, width)
        self._check_unshift_room(width)
        self.expand_left_if_needed(width)
        self._unshift_unchecked(self._set_at_uint_unchecked, width, value)

    def shift_uint(self, width: int) -> int:
        """Remove and return an unsigned integer from the head."""
        self._check_width(width, 0, MAX_UINT_BITS)
        self._check_stored(width)
        return self._shift_unchecked(self._get_at_uint_unchecked, width)

    def pop_uint(self, width: int) -> int:
        """Remove and return an unsigned integer from the tail."""
        self._check_width(width, 0, MAX_UINT_BITS)
        self._check_stored(width)
        return self._pop_unchecked(self._get_at_uint_unchecked, width)

    # ------------------------------------------------------------------
    # Int: 1 to 53 bits, two's complement
    # ------------------------------------------------------------------

    def set_at_int(self, index: int, width: int, value: int) -> None:
        """Write a signed ``width``-bit integer at ``index``.

        :param width: Field width, 1 to 53 bits.
        :type width: int
        :param value: ``-2 ** (width - 1) <= value < 2 ** (width - 1)``.
        :type value: int
        """
        self._check_width(width, 1, MAX_UINT_BITS)
        self._check_index(index, width)
        self._check_int_value(value, width)
        self._set_at_int_unchecked(index, width, value)

    def set_until_int(self, index: int, width: int, value: int) -> None:
        """Write a signed integer ending ``index`` bits before the end."""
        self._check_width(width, 1, MAX_UINT_BITS)
        self._check_index(index, width)
        self._check_int_value(value, width)
        self._set_at_int_unchecked(self._until(index, width), width, value)

    def get_at_int(self, index: int, width: int) -> int:
        """Read a signed ``width``-bit integer at ``index``."""
        self._check_width(width, 1, MAX_UINT_BITS)
        self._check_index(index, width)
        return self._get_at_int_unchecked(index, width)

    def get_until_int(self, index: int, width: int) -> int:
        """Read a signed integer ending ``index`` bits before the end."""
        self._check_width(width, 1, MAX_UINT_BITS)
        self._check_index(index, width)
        return self._get_at_int_unchecked(self._until(index, width), width)

    def push_int(self, width: int, value: int) -> None:
        """Append a signed ``width``-bit integer."""
        self._check_width(width, 1, MAX_UINT_BITS)
        self._check_int_value(value, width)
        self._check_push_room(width)
        self.expand_right_if_needed(width)
        self._push_unchecked(self._set_at_int_unchecked, width, value)

    def unshift_int(self, width: int, value: int) -> None:
        """Prepend a signed ``width``-bit integer."""
        self._check_width(width, 1, MAX_UINT_BITS)
        self._check_int_value(value, width)
        self._check_unshift_room(width)
        self.expand_left_if_needed(width)
        self._unshift_unchecked(self._set_at_int_unchecked, width, value)

    def shift_int(self, width: int) -> int:
        """Remove and return a signed integer from the head."""
        self._check_width(width, 1, MAX_UINT_BITS)
        self._check_stored(width)
        return self._shift_unchecked(self._get_at_int_unchecked, width)

    def pop_int(self, width: int) -> int:
        """Remove and return a signed integer from the tail."""
        self._check_width(width, 1, MAX_UINT_BITS)
        self._check_stored(width)
        return self._pop_unchecked(self._get_at_int_unchecked, width)

    # ------------------------------------------------------------------
    # BigUint: 0 to 64 bits
    # ------------------------------------------------------------------

    def set_at_big_uint(self, index: int, width: int, value: int) -> None:
        """Write an unsigned integer of up to 64 bits at ``index``."""
        self._check_width(width, 0, MAX_BIG_BITS)
        self._check_index(index, width)
        self._check_uint_value(value, width)
        self._set_at_big_uint_unchecked(index, width, value)

    def set_until_big_uint(self, index: int, width: int, value: int) -> None:
        """Write a 64-bit-capable uint ending ``index`` bits before the end."""
        self._check_width(width, 0, MAX_BIG_BITS)
        self._check_index(index, width)
        self._check_uint_value(value, width)
        self._set_at_big_uint_unchecked(
            self._until(index, width), width, value
        )

    def get_at_big_uint(self, index: int, width: int) -> int:
        """Read an unsigned integer of up to 64 bits at ``index``."""
        self._check_width(width, 0, MAX_BIG_BITS)
        self._check_index(index, width)
        return self._get_at_big_uint_unchecked(index, width)

    def get_until_big_uint(self, index: int, width: int) -> int:
        """Read a 64-bit-capable uint ending ``index`` bits before the end."""
        self._check_width(width, 0, MAX_BIG_BITS)
        self._check_index(index, width)
        return self._get_at_big_uint_unchecked(
            self._until(index, width), width
        )

    def push_big_uint(self, width: int, value: int) -> None:
        """Append an unsigned integer of up to 64 bits."""
        self._check_width(width, 0, MAX_BIG_BITS)
        self._check_uint_value(value, width)
        self._check_push_room(width)
        self.expand_right_if_needed(width)
        self._push_unchecked(self._set_at_big_uint_unchecked, width, value)

    def unshift_big_uint(self, width: int, value: int) -> None:
        """Prepend an unsigned integer of up to 64 bits."""
        self._check_width(width, 0, MAX_BIG_BITS)
        self._check_uint_value(value, width)
        self._check_unshift_room(width)
        self.expand_left_if_needed(width)
        self._unshift_unchecked(self._set_at_big_uint_unchecked, width, value)

    def shift_big_uint(self, width: int) -> int:
        """Remove and return an unsigned big integer from the head."""
        self._check_width(width, 0, MAX_BIG_BITS)
        self._check_stored(width)
        return self._shift_unchecked(self._get_at_big_uint_unchecked, width)

    def pop_big_uint(self, width: int) -> int:
        """Remove and return an unsigned big integer from the tail."""
        self._check_width(width, 0, MAX_BIG_BITS)
        self._check_stored(width)
        return self._pop_unchecked(self._get_at_big_uint_unchecked, width)

    # ------------------------------------------------------------------
    # BigInt: 1 to 64 bits, two's complement
    # ------------------------------------------------------------------

    def set_at_big_int(self, index: int, width: int, value: int) -> None:
        """Write a signed integer of up to 64 bits at ``index``."""
        self._check_width(width, 1, MAX_BIG_BITS)
        self._check_index(index, width)
        self._check_int_value(value, width)
        self._set_at_big_int_unchecked(index, width, value)

    def set_until_big_int(self, index: int, width: int, value: int) -> None:
        """Write a signed integer of up to 64 bits ending before ``index``."""
        self._check_width(width, 1, MAX_BIG_BITS)
        self._check_index(index, width)
        self._check_int_value(value, width)
        self._set_at_big_int_unchecked(self._until(index, width), width, value)

    def get_at_big_int(self, index: int, width: int) -> int:
        """Read a signed integer of up to 64 bits at ``index``."""
        self._check_width(width, 1, MAX_BIG_BITS)
        self._check_index(index, width)
        return self._get_at_big_int_unchecked(index, width)

    def get_until_big_int(self, index: int, width: int) -> int:
        """Read a signed integer of up to 64 bits ending before ``index``."""
        self._check_width(width, 1, MAX_BIG_BITS)
        self._check_index(index, width)
        return self._get_at_big_int_unchecked(
            self._until(index, width), width
        )

    def push_big_int(self, width: int, value: int) -> None:
        """Append a signed integer of up to 64 bits."""
        self._check_width(width, 1, MAX_BIG_BITS)
        self._check_int_value(value, width)
        self._check_push_room(width)
        self.expand_right_if_needed(width)
        self._push_unchecked(self._set_at_big_int_unchecked, width, value)

    def unshift_big_int(self, width: int, value: int) -> None:
        """Prepend a signed integer of up to 64 bits."""
        self._check_width(width, 1, MAX_BIG_BITS)
        self._check_int_value(value, width)
        self._check_unshift_room(width)
        self.expand_left_if_needed(width)
        self._unshift_unchecked(self._set_at_big_int_unchecked, width, value)

    def shift_big_int(self, width: int) -> int:
        """Remove and return a signed big integer from the head."""
        self._check_width(width, 1, MAX_BIG_BITS)
        self._check_stored(width)
        return self._shift_unchecked(self._get_at_big_int_unchecked, width)

    def pop_big_int(self, width: int) -> int:
        """Remove and return a signed big integer from the tail."""
        self._check_width(width, 1, MAX_BIG_BITS)
        self._check_stored(width)
        return self._pop_unchecked(self._get_at_big_int_unchecked, width)

    # ------------------------------------------------------------------
    # Float32
    # ------------------------------------------------------------------

    def set_at_float32(self, index: int, value: float) -> None:
        """Write an IEEE-754 single at ``index`` in the active byte order.

        :raises BitRangeError: If a finite ``value`` overflows float32.
        """
        self._check_index(index, 32)
        self._check_float(value, "<f")
        self._set_at_float32_unchecked(index, 32, value)

    def set_until_float32(self, index: int, value: float) -> None:
        """Write a float32 ending ``index`` bits before the end."""
        self._check_index(index, 32)
        self._check_float(value, "<f")
        self._set_at_float32_unchecked(self._until(index, 32), 32, value)

    def get_at_float32(self, index: int) -> float:
        """Read a float32 at ``index`` in the active byte order."""
        self._check_index(index, 32)
        return self._get_at_float32_unchecked(index)

    def get_until_float32(self, index: int) -> float:
        """Read a float32 ending ``index`` bits before the end."""
        self._check_index(index, 32)
        return self._get_at_float32_unchecked(self._until(index, 32))

    def push_float32(self, value: float) -> None:
        """Append a float32."""
        self._check_float(value, "<f")
        self._check_push_room(32)
        self.expand_right_if_needed(32)
        self._push_unchecked(self._set_at_float32_unchecked, 32, value)

    def unshift_float32(self, value: float) -> None:
        """Prepend a float32."""
        self._check_float(value, "<f")
        self._check_unshift_room(32)
        self.expand_left_if_needed(32)
        self._unshift_unchecked(self._set_at_float32_unchecked, 32, value)

    def shift_float32(self) -> float:
        """Remove and return a float32 from the head."""
        self._check_stored(32)
        return self._shift_unchecked(self._get_at_float32_unchecked, 32)

    def pop_float32(self) -> float:
        """Remove and return a float32 from the tail."""
        self._check_stored(32)
        return self._pop_unchecked(self._get_at_float32_unchecked, 32)

    # ------------------------------------------------------------------
    # Float64
    # ------------------------------------------------------------------

    def set_at_float64(self, index: int, value: float) -> None:
        """Write an IEEE-754 double at ``index`` in the active byte order."""
        self._check_index(index, 64)
        self._check_float(value, "<d")
        self._set_at_float64_unchecked(index, 64, value)

    def set_until_float64(self, index: int, value: float) -> None:
        """Write a float64 ending ``index`` bits before the end."""
        self._check_index(index, 64)
        self._check_float(value, "<d")
        self._set_at_float64_unchecked(self._until(index, 64), 64, value)

    def get_at_float64(self, index: int) -> float:
        """Read a float64 at ``index``."""
        self._check_index(index, 64)
        return self._get_at_float64_unchecked(index)

    def get_until_float64(self, index: int) -> float:
        """Read a float64 ending ``index`` bits before the end."""
        self._check_index(index, 64)
        return self._get_at_float64_unchecked(self._until(index, 64))

    def push_float64(self, value: float) -> None:
        """Append a float64."""
        self._check_float(value, "<d")
        self._check_push_room(64)
        self.expand_right_if_needed(64)
        self._push_unchecked(self._set_at_float64_unchecked, 64, value)

    def unshift_float64(self, value: float) -> None:
        """Prepend a float64."""
        self._check_float(value, "<d")
        self._check_unshift_room(64)
        self.expand_left_if_needed(64)
        self._unshift_unchecked(self._set_at_float64_unchecked, 64, value)

    def shift_float64(self) -> float:
        """Remove and return a float64 from the head."""
        self._check_stored(64)
        return self._shift_unchecked(self._get_at_float64_unchecked, 64)

    def pop_float64(self) -> float:
        """Remove and return a float64 from the tail."""
        self._check_stored(64)
        return self._pop_unchecked(self._get_at_float64_unchecked, 64)

    # ------------------------------------------------------------------
    # Bytes: opaque blocks, the DataView passthrough
    # ------------------------------------------------------------------

    def set_at_bytes(self, index: int, data,
                     width: Optional[int] = None,
                     reverse: bool = False) -> None:
        """Copy a byte block into the window at ``index``.

        :param index: Offset from the front of the stored window.
        :type index: int
        :param data: Bytes-like source.
        :param width: Bits to write, ``len(data) * 8`` by default. When not a
            multiple of 8 the low bits of the last written byte are used.
        :type width: Optional[int]
        :param reverse: Place the bytes of ``data`` last-to-first.
        :type reverse: bool
        :raises BitTypeError: If ``data`` is not bytes-like.
        :raises BitRangeError: If ``width`` does not match ``data`` or the
            block does not fit in the stored window.
        """
        width = self._check_block(data, width)
        self._check_index(index, width)
        self._set_at_bytes_unchecked(
            index, self._as_bytes(data), width, reverse
        )

    def set_until_bytes(self, index: int, data,
                        width: Optional[int] = None,
                        reverse: bool = False) -> None:
        """Copy a byte block so that it ends ``index`` bits before the end."""
        width = self._check_block(data, width)
        self._check_index(index, width)
        self._set_at_bytes_unchecked(
            self._until(index, width), self._as_bytes(data), width, reverse
        )

    def get_at_bytes(self, index: int, width: int,
                     reverse: bool = False) -> bytes:
        """Read ``width`` bits at ``index`` as bytes.

        The last byte is zero-padded when ``width`` is not a multiple of 8.

        :rtype: bytes
        """
        width = check_uint(width, MAX_BIT_CAPACITY, "width")
        self._check_index(index, width)
        return self._get_at_bytes_unchecked(index, width, reverse)

    def get_until_bytes(self, index: int, width: int,
                        reverse: bool = False) -> bytes:
        """Read ``width`` bits ending ``index`` bits before the end."""
        width = check_uint(width, MAX_BIT_CAPACITY, "width")
        self._check_index(index, width)
        return self._get_at_bytes_unchecked(
            self._until(index, width), width, reverse
        )

    def push_bytes(self, data, width: Optional[int] = None,
                   reverse: bool = False) -> None:
        """Append ``width`` bits of ``data``, all of it by default."""
        width = self._check_block(data, width)
        data = self._as_bytes(data)
        self._check_push_room(width)
        self.expand_right_if_needed(width)
        self._pushed += width
        self._set_at_bytes_unchecked(
            self._until(0, width), data, width, reverse
        )

    def unshift_bytes(self, data, width: Optional[int] = None,
                      reverse: bool = False) -> None:
        """Prepend ``width`` bits of ``data``, all of it by default."""
        width = self._check_block(data, width)
        data = self._as_bytes(data)
        self._check_unshift_room(width)
        self.expand_left_if_needed(width)
        self._shifted -= width
        self._set_at_bytes_unchecked(0, data, width, reverse)

    def shift_bytes(self, width: Optional[int] = None,
                    reverse: bool = False) -> bytes:
        """Remove ``width`` bits (all stored bits by default) from the head."""
        width = self._check_block_read(width)
        self._check_stored(width)
        result = self._get_at_bytes_unchecked(0, width, reverse)
        self._shifted += width
        return result

    def pop_bytes(self, width: Optional[int] = None,
                  reverse: bool = False) -> bytes:
        """Remove ``width`` bits (all stored bits by default) from the tail."""
        width = self._check_block_read(width)
        self._check_stored(width)
        result = self._get_at_bytes_unchecked(
            self._until(0, width), width, reverse
        )
        self._pushed -= width
        return result
