import logging
import unittest
from unittest.mock import MagicMock, patch
from sib_api_v3_sdk.rest import ApiException
from bikeclub.mailer import BrevoMailer
from bikeclub.exceptions import GatewayError
from bikeclub.logging_config import LocalTimeFormatter


class TestBrevoMailer(unittest.TestCase):
    def setUp(self):
        self.mailer = BrevoMailer(api_key='key', sender_email='noreply@x.com', sender_name='Royal Bike Club')

    def test_from_config(self):
        mailer = BrevoMailer.from_config({
            'MAIL_API_KEY': 'abc',
            'MAIL_SENDER_EMAIL': 'club@x.com',
            'MAIL_SENDER_NAME': 'Club',
        })
        self.assertEqual((mailer.api_key, mailer.sender_email, mailer.sender_name), ('abc', 'club@x.com', 'Club'))

    def test_unconfigured_mailer_raises(self):
        with self.assertRaises(GatewayError):
            BrevoMailer(api_key='', sender_email='', sender_name='Club').send('ana@x.com', 'Hi', 'Hello')

    def test_send_builds_message(self):
        api = MagicMock()
        with patch.object(BrevoMailer, '_api', return_value=api):
            self.mailer.send('ana@x.com', 'Your OTP for Login', 'Your OTP is 123456', to_name='Ana')

        api.send_transac_email.assert_called_once()
        message = api.send_transac_email.call_args[0][0]
        self.assertEqual(message.to, [{'email': 'ana@x.com', 'name': 'Ana'}])
        self.assertEqual(message.sender, {'name': 'Royal Bike Club', 'email': 'noreply@x.com'})
        self.assertEqual(message.subject, 'Your OTP for Login')

    def test_api_error_becomes_gateway_error(self):
        api = MagicMock()
        api.send_transac_email.side_effect = ApiException(status=500, reason='Internal Server Error')
        with patch.object(BrevoMailer, '_api', return_value=api):
            with self.assertRaises(GatewayError):
                self.mailer.send('ana@x.com', 'Hi', 'Hello')


class TestLocalTimeFormatter(unittest.TestCase):
    def test_formats_in_configured_timezone(self):
        record = logging.makeLogRecord({'created': 0})
        formatter = LocalTimeFormatter(timezone='Asia/Kolkata')
        self.assertEqual(formatter.formatTime(record, '%Y-%m-%d %H:%M:%S'), '1970-01-01 05:30:00')


if __name__ == "__main__":
    unittest.main()
