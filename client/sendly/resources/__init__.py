"""Resource facades exposed as attributes of the Sendly client"""

from .account import Account
from .campaigns import Campaigns
from .contact_lists import ContactLists
from .contacts import Contacts
from .media import Media
from .messages import Messages
from .templates import Templates
from .verify import Sessions, Verify
from .webhooks import Webhooks

__all__ = [
    'Account',
    'Campaigns',
    'ContactLists',
    'Contacts',
    'Media',
    'Messages',
    'Sessions',
    'Templates',
    'Verify',
    'Webhooks',
]
