"""
Unit tests for RTU framing: CRC, encoding, decoding and the response length table.
"""
import pytest

from modbus_rtu_tcp.com.modbus.base.pdu import ProtocolDataUnit
from modbus_rtu_tcp.com.modbus.rtu.crc import append_crc, check_crc, crc16
from modbus_rtu_tcp.com.modbus.rtu.packager import RtuPackager, calculate_response_length
from modbus_rtu_tcp.defaults.exceptions import CrcError, FrameError


class TestCrc:
    """CRC-16/MODBUS"""

    @pytest.mark.parametrize("frame, trailer", [
        (bytes([0x01, 0x03, 0x00, 0x00, 0x00, 0x02]), b"\xc4\x0b"),
        (bytes([0x11, 0x03, 0x00, 0x6B, 0x00, 0x03]), b"\x76\x87"),
    ])
    def test_known_frames(self, frame, trailer):
        assert append_crc(frame) == frame + trailer

    def test_crc_of_empty_input_is_init_value(self):
        assert crc16(b"") == 0xFFFF

    def test_check_accepts_valid_frame(self, frames):
        check_crc(frames.response)

    def test_check_rejects_corrupted_frame(self, frames):
        corrupted = bytearray(frames.response)
        corrupted[3] ^= 0xFF

        with pytest.raises(CrcError) as exc_info:
            check_crc(bytes(corrupted))

        assert exc_info.value.actual == int.from_bytes(frames.response[-2:], "little")
        assert exc_info.value.expected != exc_info.value.actual

    def test_check_rejects_frame_without_room_for_crc(self):
        with pytest.raises(FrameError):
            check_crc(b"\x01\x03")


class TestResponseLength:
    """Expected response length per request function code"""

    @pytest.mark.parametrize("function, quantity, expected", [
        (0x01, 1, 6),
        (0x01, 8, 6),
        (0x01, 9, 7),
        (0x01, 16, 7),
        (0x02, 17, 8),
        (0x03, 2, 9),
        (0x03, 125, 255),
        (0x04, 1, 7),
        (0x17, 3, 11),
        (0x05, 0xFF00, 8),
        (0x06, 3, 8),
        (0x0F, 10, 8),
        (0x10, 2, 8),
        (0x16, 0, 10),
        (0x18, 0, 4),
        (0x2B, 0, 4),
    ])
    def test_length_table(self, function, quantity, expected):
        request = append_crc(bytes([0x01, function, 0x00, 0x00]) + quantity.to_bytes(2, "big"))
        assert calculate_response_length(request) == expected

    def test_register_count_beyond_frame_size(self):
        request = append_crc(bytes([0x01, 0x03, 0x00, 0x00, 0x00, 0xC8]))
        assert calculate_response_length(request) == 405

    @pytest.mark.parametrize("function", [0x01, 0x02, 0x03, 0x04, 0x17])
    def test_truncated_read_request_falls_back_to_minimum(self, function):
        assert calculate_response_length(bytes([0x01, function, 0x00, 0x00])) == 4

    def test_packager_exposes_same_table(self, frames):
        assert RtuPackager().calculate_response_length(frames.request) == 9


class TestRtuPackager:
    """Encoding, verification and decoding"""

    def test_slave_id_out_of_range(self):
        with pytest.raises(ValueError):
            RtuPackager(slave_id=256)

    def test_encode_read_holding(self, frames):
        packager = RtuPackager(slave_id=1)
        pdu = ProtocolDataUnit(0x03, b"\x00\x00\x00\x02")

        assert packager.encode(pdu) == frames.request

    def test_encode_maximum_payload(self):
        adu = RtuPackager(slave_id=2).encode(ProtocolDataUnit(0x10, bytes(252)))
        assert len(adu) == 256
        assert adu[:2] == b"\x02\x10"

    def test_encode_rejects_oversized_payload(self):
        with pytest.raises(FrameError):
            RtuPackager().encode(ProtocolDataUnit(0x10, bytes(253)))

    def test_verify_accepts_matching_slave(self, frames):
        RtuPackager().verify(frames.request, frames.response)

    def test_verify_rejects_short_response(self, frames):
        with pytest.raises(FrameError):
            RtuPackager().verify(frames.request, b"\x01\x03\x00")

    def test_verify_rejects_foreign_slave(self, frames):
        response = append_crc(bytes([0x07, 0x03, 0x02, 0x00, 0x01]))
        with pytest.raises(FrameError, match="slave id"):
            RtuPackager().verify(frames.request, response)

    def test_decode_extracts_pdu(self, frames):
        pdu = RtuPackager().decode(frames.response)

        assert pdu.function_code == 0x03
        assert pdu.data == b"\x04\x00\x0a\x00\x0b"
        assert not pdu.is_exception

    def test_decode_exception_response(self, frames):
        pdu = RtuPackager().decode(frames.exception)

        assert pdu.function_code == 0x83
        assert pdu.data == b"\x02"
        assert pdu.is_exception

    def test_decode_rejects_bad_crc(self, frames):
        with pytest.raises(CrcError):
            RtuPackager().decode(frames.response[:-1] + bytes([frames.response[-1] ^ 0xFF]))

    def test_decode_rejects_short_frame(self):
        with pytest.raises(FrameError):
            RtuPackager().decode(b"\x01\x03\x00")


class TestProtocolDataUnit:

    def test_function_code_out_of_range(self):
        with pytest.raises(ValueError):
            ProtocolDataUnit(0x100)

    def test_data_is_copied_to_bytes(self):
        pdu = ProtocolDataUnit(0x06, bytearray(b"\x00\x01"))
        assert isinstance(pdu.data, bytes)

    def test_repr_shows_hex(self):
        assert repr(ProtocolDataUnit(0x03, b"\x00\x02")) == (
            "ProtocolDataUnit(function_code=0x03, data=00 02)"
        )
