from unittest import TestCase

import numpy as np

from skip32cipher.exceptions import (
    InvalidKeyError,
    InvalidKeyLengthError,
    MalformedEncodingError,
    Skip32Error,
    UnsupportedKeyFormatError,
)
from skip32cipher.key_schedule import (
    KEY_SIZE,
    KeyFormat,
    Skip32Key,
    expand_key,
    generate_key,
    round_key_bytes,
)

KEY_HEX = "1234567890abcdef0123"
KEY_BYTES = bytes.fromhex(KEY_HEX)
KEY_BASE64 = "EjRWeJCrze8BIw=="


class TestSkip32Key(TestCase):
    def test_null_byte_array_key(self):
        with self.assertRaises(InvalidKeyError):
            Skip32Key.from_bytes(None)

    def test_incorrect_byte_array_key_length(self):
        with self.assertRaises(InvalidKeyLengthError):
            Skip32Key.from_bytes(b"\0")

    def test_length_error_is_invalid_key(self):
        with self.assertRaises(InvalidKeyError):
            Skip32Key.from_bytes(b"\0" * (KEY_SIZE + 1))

    def test_non_bytes_key(self):
        with self.assertRaises(InvalidKeyError):
            Skip32Key.from_bytes(KEY_HEX)

    def test_null_hex_key(self):
        with self.assertRaises(InvalidKeyError):
            Skip32Key.from_hex(None)

    def test_empty_hex_key(self):
        with self.assertRaises(InvalidKeyError):
            Skip32Key.from_hex("")

    def test_incorrect_hex_key_length(self):
        with self.assertRaises(InvalidKeyLengthError):
            Skip32Key.from_hex("abc")

    def test_malformed_hex_key(self):
        with self.assertRaises(MalformedEncodingError):
            Skip32Key.from_hex("zz34567890abcdef0123")

    def test_hex_key_with_separators(self):
        with self.assertRaises(MalformedEncodingError):
            Skip32Key.from_hex("12 34 56 78 90 ab cd")

    def test_hex_key_is_case_insensitive(self):
        self.assertEqual(Skip32Key.from_hex(KEY_HEX), Skip32Key.from_hex(KEY_HEX.upper()))

    def test_null_base64_key(self):
        with self.assertRaises(InvalidKeyError):
            Skip32Key.from_base64(None)

    def test_empty_base64_key(self):
        with self.assertRaises(InvalidKeyError):
            Skip32Key.from_base64("")

    def test_incorrect_base64_key_length(self):
        with self.assertRaises(InvalidKeyLengthError):
            Skip32Key.from_base64("abcd")

    def test_invalid_base64_key(self):
        with self.assertRaises(MalformedEncodingError):
            Skip32Key.from_base64("abcde")

    def test_base64_rejects_non_alphabet(self):
        with self.assertRaises(MalformedEncodingError):
            Skip32Key.from_base64("EjRWeJCr*e8BIw==")

    def test_errors_are_value_errors(self):
        with self.assertRaises(ValueError):
            Skip32Key.from_hex("abc")
        self.assertTrue(issubclass(InvalidKeyError, Skip32Error))

    def test_formats_are_equivalent(self):
        raw = Skip32Key.from_bytes(KEY_BYTES)
        self.assertEqual(raw, Skip32Key.from_hex(KEY_HEX))
        self.assertEqual(raw, Skip32Key.from_base64(KEY_BASE64))
        self.assertEqual(KEY_HEX, raw.hex())
        self.assertEqual(KEY_BASE64, raw.base64())

    def test_accepts_bytearray_and_memoryview(self):
        expected = Skip32Key.from_bytes(KEY_BYTES)
        self.assertEqual(expected, Skip32Key.from_bytes(bytearray(KEY_BYTES)))
        self.assertEqual(expected, Skip32Key.from_bytes(memoryview(KEY_BYTES)))

    def test_key_is_copied(self):
        material = bytearray(KEY_BYTES)
        key = Skip32Key.from_bytes(material)
        material[0] ^= 0xff
        self.assertEqual(KEY_BYTES, key.to_bytes())

    def test_key_is_immutable(self):
        key = Skip32Key.from_bytes(KEY_BYTES)
        with self.assertRaises(AttributeError):
            key._material = b"\0" * KEY_SIZE

    def test_repr_hides_key(self):
        key = Skip32Key.from_bytes(KEY_BYTES)
        self.assertNotIn(KEY_HEX, repr(key))

    def test_parse(self):
        expected = Skip32Key.from_bytes(KEY_BYTES)
        self.assertEqual(expected, Skip32Key.parse(KEY_BYTES, KeyFormat.RAW))
        self.assertEqual(expected, Skip32Key.parse(KEY_HEX, KeyFormat.HEX))
        self.assertEqual(expected, Skip32Key.parse(KEY_BASE64, KeyFormat.BASE64))
        self.assertEqual(expected, Skip32Key.parse(KEY_BASE64, "Base64"))

    def test_parse_unsupported_format(self):
        with self.assertRaises(UnsupportedKeyFormatError):
            Skip32Key.parse(KEY_HEX, "octal")
        with self.assertRaises(UnsupportedKeyFormatError):
            Skip32Key.parse(KEY_HEX, 3)

    def test_generate_key(self):
        key = generate_key()
        self.assertEqual(KEY_SIZE, len(key.to_bytes()))
        self.assertNotEqual(key, generate_key())


class TestKeySchedule(TestCase):
    def test_round_key_bytes(self):
        key = Skip32Key.from_bytes(bytes(range(KEY_SIZE)))
        self.assertEqual([0, 1, 2, 3], round_key_bytes(key, 0).tolist())
        self.assertEqual([8, 9, 0, 1], round_key_bytes(key, 2).tolist())
        self.assertEqual([2, 3, 4, 5], round_key_bytes(key, 23).tolist())

    def test_round_key_bytes_negative_round(self):
        key = Skip32Key.from_bytes(bytes(range(KEY_SIZE)))
        # (4 * -1 + j) mod 10 wraps to 6..9
        self.assertEqual([6, 7, 8, 9], round_key_bytes(key, -1).tolist())

    def test_expand_key(self):
        key = Skip32Key.from_bytes(KEY_BYTES)
        schedule = expand_key(key)
        self.assertEqual((24, 4), schedule.shape)
        self.assertEqual(np.uint8, schedule.dtype)
        for k in range(24):
            self.assertEqual(round_key_bytes(key, k).tolist(), schedule[k].tolist())

    def test_expand_key_read_only(self):
        schedule = expand_key(generate_key())
        with self.assertRaises(ValueError):
            schedule[0, 0] = 0
