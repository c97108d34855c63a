import math
import unittest
from bikeclub.exceptions import ValidationError
from bikeclub.validation import EMAIL_PATTERN, MAX_INTEGER, parse_int, parse_price, is_valid_id


class TestParseInt(unittest.TestCase):
    def test_accepts_padded_digits(self):
        self.assertEqual(parse_int(' 12 ', 'Seats'), 12)

    def test_bounds(self):
        self.assertEqual(parse_int('365', 'Rental days', minimum=1, maximum=365), 365)
        with self.assertRaises(ValidationError):
            parse_int('366', 'Rental days', minimum=1, maximum=365)
        with self.assertRaises(ValidationError):
            parse_int('0', 'Rental days', minimum=1)

    def test_default_maximum_fits_integer_column(self):
        self.assertEqual(parse_int(str(MAX_INTEGER), 'Quantity'), MAX_INTEGER)
        with self.assertRaises(ValidationError) as ctx:
            parse_int(str(MAX_INTEGER + 1), 'Quantity')
        self.assertIn('Quantity cannot be more than', ctx.exception.message)

    def test_rejects_non_numbers(self):
        for value in (None, '', 'three', '1.5'):
            with self.assertRaises(ValidationError):
                parse_int(value, 'Seats')


class TestParsePrice(unittest.TestCase):
    def test_rejects_non_finite(self):
        for value in ('nan', 'inf', '-inf', 'Infinity'):
            with self.assertRaises(ValidationError):
                parse_price(value, 'Price')

    def test_rejects_negative(self):
        with self.assertRaises(ValidationError):
            parse_price('-0.5', 'Price')

    def test_negative_zero_becomes_zero(self):
        price = parse_price('-0', 'Price')
        self.assertEqual(math.copysign(1, price), 1)


class TestHelpers(unittest.TestCase):
    def test_valid_id_range(self):
        self.assertTrue(is_valid_id(1))
        self.assertFalse(is_valid_id(0))
        self.assertFalse(is_valid_id(MAX_INTEGER + 1))

    def test_email_pattern(self):
        self.assertTrue(EMAIL_PATTERN.fullmatch('ana@x.com'))
        self.assertFalse(EMAIL_PATTERN.fullmatch('ana.x.com'))


if __name__ == "__main__":
    unittest.main()
