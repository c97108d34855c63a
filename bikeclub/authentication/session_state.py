# bikeclub/authentication/session_state.py
"""
Authentication state of one client, kept under a single session key.

A client is always in exactly one of these states:

    Anonymous                          nothing stored
    AwaitingOtp(email, purpose)        password checked (login) or reset
                                       requested, OTP mailed
    ResetVerified(email)               reset OTP confirmed, new password due
    Authenticated(user_id, email, role)

Flask-Login is fed from ``Authenticated`` via ``SessionUser`` so the role is
resolved once, when the OTP is verified.
"""
from collections import namedtuple
from flask_login import UserMixin

SESSION_KEY = 'auth'

LOGIN = 'login'
RESET = 'reset'
PURPOSES = (LOGIN, RESET)

ROLE_ADMIN = 'admin'
ROLE_USER = 'user'

Anonymous = namedtuple('Anonymous', [])
AwaitingOtp = namedtuple('AwaitingOtp', ['email', 'purpose'])
ResetVerified = namedtuple('ResetVerified', ['email'])
Authenticated = namedtuple('Authenticated', ['user_id', 'email', 'role'])

ANONYMOUS = Anonymous()

_KINDS = {
    'awaiting_otp': AwaitingOtp,
    'reset_verified': ResetVerified,
    'authenticated': Authenticated,
}


def load_state(session):
    raw = session.get(SESSION_KEY)
    if not isinstance(raw, dict):
        return ANONYMOUS

    state_cls = _KINDS.get(raw.get('kind'))
    if state_cls is None:
        return ANONYMOUS

    try:
        state = state_cls(**{field: raw[field] for field in state_cls._fields})
    except KeyError:
        return ANONYMOUS

    if isinstance(state, AwaitingOtp) and state.purpose not in PURPOSES:
        return ANONYMOUS
    return state


def store_state(session, state):
    if isinstance(state, Anonymous):
        session.pop(SESSION_KEY, None)
        return

    for kind, state_cls in _KINDS.items():
        if isinstance(state, state_cls):
            payload = state._asdict()
            payload['kind'] = kind
            session[SESSION_KEY] = payload
            return

    raise TypeError(f"Unsupported session state: {state!r}")


def role_for(user):
    return ROLE_ADMIN if user.is_admin else ROLE_USER


class SessionUser(UserMixin):
    """The signed-in identity as Flask-Login sees it."""

    def __init__(self, state):
        self.id = state.user_id
        self.email = state.email
        self.role = state.role

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN
