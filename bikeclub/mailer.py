# bikeclub/mailer.py
import sib_api_v3_sdk
import urllib3
from flask import current_app
from sib_api_v3_sdk.rest import ApiException
from bikeclub.exceptions import GatewayError
from bikeclub.logging_config import setup_logging

logger = setup_logging()


class BrevoMailer:
    """Sends transactional email through the Brevo API.

    Credentials are read once from the app config and shared by every flow
    that sends mail (OTP codes, booking confirmations).
    """

    def __init__(self, api_key, sender_email, sender_name):
        self.api_key = api_key
        self.sender_email = sender_email
        self.sender_name = sender_name

    @classmethod
    def from_config(cls, config):
        return cls(
            api_key=config.get('MAIL_API_KEY'),
            sender_email=config.get('MAIL_SENDER_EMAIL'),
            sender_name=config.get('MAIL_SENDER_NAME'),
        )

    def _api(self):
        configuration = sib_api_v3_sdk.Configuration()
        configuration.api_key['api-key'] = self.api_key
        api_client = sib_api_v3_sdk.ApiClient(configuration)
        return sib_api_v3_sdk.TransactionalEmailsApi(api_client)

    def send(self, to_email, subject, html_content, to_name=None):
        if not self.api_key or not self.sender_email:
            logger.error("Mail provider is not configured; cannot send '%s' to %s", subject, to_email)
            raise GatewayError('Email service is not configured.')

        recipient = {"email": to_email}
        if to_name:
            recipient["name"] = to_name

        send_smtp_email = sib_api_v3_sdk.SendSmtpEmail(
            to=[recipient],
            sender={"name": self.sender_name, "email": self.sender_email},
            subject=subject,
            html_content=html_content
        )

        try:
            api_response = self._api().send_transac_email(send_smtp_email)
        except ApiException as e:
            logger.error(f"Exception when calling TransactionalEmailsApi->send_transac_email: {e}")
            raise GatewayError('Could not send email. Please try again.') from e
        except urllib3.exceptions.HTTPError as e:
            logger.error(f"Mail provider unreachable: {e}")
            raise GatewayError('Could not send email. Please try again.') from e

        logger.info(f"Email '{subject}' sent to {to_email}: {api_response}")
        return api_response


def get_mailer():
    return current_app.extensions['mailer']
