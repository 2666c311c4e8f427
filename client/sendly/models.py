"""
Response models for the Sendly API

Read-only projections of JSON responses. The API is not consistent about key
casing, so each field is looked up under a short ordered list of candidate keys
and falls back to a default when none is present.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional


def pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the value of the first key present (and not None) in data"""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp, returning None if it can't be parsed"""
    if not value or not isinstance(value, str):
        return None
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Message:
    """An SMS or MMS message"""

    STATUS_QUEUED = 'queued'
    STATUS_SENT = 'sent'
    STATUS_DELIVERED = 'delivered'
    STATUS_FAILED = 'failed'
    STATUS_BOUNCED = 'bounced'
    STATUS_RETRYING = 'retrying'

    DIRECTION_OUTBOUND = 'outbound'
    DIRECTION_INBOUND = 'inbound'

    SENDER_TYPE_USER = 'user'
    SENDER_TYPE_API = 'api'
    SENDER_TYPE_SYSTEM = 'system'
    SENDER_TYPE_CAMPAIGN = 'campaign'

    id: str
    to: str
    text: str
    status: str
    created_at: datetime
    updated_at: datetime
    from_: Optional[str] = None
    direction: str = DIRECTION_OUTBOUND
    segments: int = 1
    credits_used: int = 0
    is_sandbox: bool = False
    sender_type: Optional[str] = None
    telnyx_message_id: Optional[str] = None
    warning: Optional[str] = None
    sender_note: Optional[str] = None
    delivered_at: Optional[datetime] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    retry_count: int = 0
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        return cls(
            id=pick(data, 'id', default=''),
            to=pick(data, 'to', default=''),
            from_=pick(data, 'from'),
            text=pick(data, 'text', default=''),
            status=pick(data, 'status', default=''),
            direction=pick(data, 'direction', default=cls.DIRECTION_OUTBOUND),
            segments=int(pick(data, 'segments', default=1)),
            credits_used=int(pick(data, 'credits_used', 'creditsUsed', default=0)),
            is_sandbox=bool(pick(data, 'is_sandbox', 'isSandbox', default=False)),
            sender_type=pick(data, 'sender_type', 'senderType'),
            telnyx_message_id=pick(data, 'telnyx_message_id', 'telnyxMessageId'),
            warning=pick(data, 'warning'),
            sender_note=pick(data, 'sender_note', 'senderNote'),
            created_at=parse_datetime(pick(data, 'created_at', 'createdAt')) or _now(),
            updated_at=parse_datetime(pick(data, 'updated_at', 'updatedAt')) or _now(),
            delivered_at=parse_datetime(pick(data, 'delivered_at', 'deliveredAt')),
            error_code=pick(data, 'error_code', 'errorCode'),
            error_message=pick(data, 'error_message', 'errorMessage'),
            retry_count=int(pick(data, 'retry_count', 'retryCount', default=0)),
            metadata=pick(data, 'metadata'),
        )

    def is_delivered(self) -> bool:
        return self.status == self.STATUS_DELIVERED

    def is_failed(self) -> bool:
        return self.status == self.STATUS_FAILED

    def is_bounced(self) -> bool:
        """Carrier rejected the message"""
        return self.status == self.STATUS_BOUNCED

    def is_pending(self) -> bool:
        return self.status in (self.STATUS_QUEUED, self.STATUS_SENT)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'to': self.to,
            'from': self.from_,
            'text': self.text,
            'status': self.status,
            'direction': self.direction,
            'segments': self.segments,
            'credits_used': self.credits_used,
            'is_sandbox': self.is_sandbox,
            'sender_type': self.sender_type,
            'telnyx_message_id': self.telnyx_message_id,
            'warning': self.warning,
            'sender_note': self.sender_note,
            'created_at': _format_datetime(self.created_at),
            'updated_at': _format_datetime(self.updated_at),
            'delivered_at': _format_datetime(self.delivered_at),
            'error_code': self.error_code,
            'error_message': self.error_message,
            'retry_count': self.retry_count,
            'metadata': self.metadata,
        }


@dataclass(frozen=True)
class MessageList:
    """One page of messages"""

    messages: List[Message] = field(default_factory=list)
    total: int = 0
    limit: int = 20
    offset: int = 0
    has_more: bool = False

    @classmethod
    def from_dict(cls, response: Dict[str, Any]) -> "MessageList":
        messages = [Message.from_dict(item) for item in pick(response, 'data', default=[])]
        pagination = pick(response, 'pagination', default={})
        return cls(
            messages=messages,
            total=int(pick(pagination, 'total', default=len(messages))),
            limit=int(pick(pagination, 'limit', default=20)),
            offset=int(pick(pagination, 'offset', default=0)),
            has_more=bool(pick(pagination, 'has_more', 'hasMore', default=False)),
        )

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)

    def first(self) -> Optional[Message]:
        return self.messages[0] if self.messages else None

    def last(self) -> Optional[Message]:
        return self.messages[-1] if self.messages else None

    def is_empty(self) -> bool:
        return not self.messages

    def to_dict(self) -> Dict[str, Any]:
        return {
            'data': [message.to_dict() for message in self.messages],
            'pagination': {
                'total': self.total,
                'limit': self.limit,
                'offset': self.offset,
                'has_more': self.has_more,
            },
        }


@dataclass(frozen=True)
class Credits:
    """Credit balance"""

    balance: int = 0
    available_balance: int = 0
    pending_credits: int = 0
    reserved_credits: int = 0
    currency: str = 'USD'

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Credits":
        return cls(
            balance=int(pick(data, 'balance', default=0)),
            available_balance=int(pick(data, 'available_balance', 'availableBalance', 'balance', default=0)),
            pending_credits=int(pick(data, 'pending_credits', 'pendingCredits', default=0)),
            reserved_credits=int(pick(data, 'reserved_credits', 'reservedCredits', default=0)),
            currency=pick(data, 'currency', default='USD'),
        )

    def has_credits(self) -> bool:
        return self.available_balance > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'balance': self.balance,
            'available_balance': self.available_balance,
            'pending_credits': self.pending_credits,
            'reserved_credits': self.reserved_credits,
            'currency': self.currency,
        }


@dataclass(frozen=True)
class CreditTransaction:
    TYPE_PURCHASE = 'purchase'
    TYPE_USAGE = 'usage'
    TYPE_REFUND = 'refund'
    TYPE_BONUS = 'bonus'
    TYPE_ADJUSTMENT = 'adjustment'

    id: str
    type: str
    amount: int
    balance_after: int
    created_at: datetime
    description: Optional[str] = None
    reference_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CreditTransaction":
        return cls(
            id=pick(data, 'id', default=''),
            type=pick(data, 'type', default=''),
            amount=int(pick(data, 'amount', default=0)),
            balance_after=int(pick(data, 'balance_after', 'balanceAfter', default=0)),
            description=pick(data, 'description'),
            reference_id=pick(data, 'reference_id', 'referenceId'),
            created_at=parse_datetime(pick(data, 'created_at', 'createdAt')) or _now(),
        )

    def is_credit(self) -> bool:
        return self.amount > 0

    def is_debit(self) -> bool:
        return self.amount < 0


@dataclass(frozen=True)
class ApiKey:
    id: str
    name: str
    prefix: str
    created_at: datetime
    last_used_at: Optional[str] = None
    expires_at: Optional[datetime] = None
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApiKey":
        return cls(
            id=pick(data, 'id', default=''),
            name=pick(data, 'name', default=''),
            prefix=pick(data, 'prefix', default=''),
            last_used_at=pick(data, 'last_used_at', 'lastUsedAt'),
            created_at=parse_datetime(pick(data, 'created_at', 'createdAt')) or _now(),
            expires_at=parse_datetime(pick(data, 'expires_at', 'expiresAt')),
            is_active=bool(pick(data, 'is_active', 'isActive', default=True)),
        )

    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at < _now()


@dataclass(frozen=True)
class AccountVerification:
    email_verified: bool = False
    phone_verified: bool = False
    identity_verified: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccountVerification":
        return cls(
            email_verified=bool(pick(data, 'email_verified', 'emailVerified', default=False)),
            phone_verified=bool(pick(data, 'phone_verified', 'phoneVerified', default=False)),
            identity_verified=bool(pick(data, 'identity_verified', 'identityVerified', default=False)),
        )

    def is_fully_verified(self) -> bool:
        return self.email_verified and self.phone_verified and self.identity_verified


@dataclass(frozen=True)
class AccountLimits:
    messages_per_second: int = 10
    messages_per_day: int = 10000
    max_batch_size: int = 1000

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccountLimits":
        return cls(
            messages_per_second=int(pick(data, 'messages_per_second', 'messagesPerSecond', default=10)),
            messages_per_day=int(pick(data, 'messages_per_day', 'messagesPerDay', default=10000)),
            max_batch_size=int(pick(data, 'max_batch_size', 'maxBatchSize', default=1000)),
        )


@dataclass(frozen=True)
class Account:
    id: str
    email: str
    created_at: datetime
    name: Optional[str] = None
    company_name: Optional[str] = None
    verification: AccountVerification = field(default_factory=AccountVerification)
    limits: AccountLimits = field(default_factory=AccountLimits)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Account":
        return cls(
            id=pick(data, 'id', default=''),
            email=pick(data, 'email', default=''),
            name=pick(data, 'name'),
            company_name=pick(data, 'company_name', 'companyName'),
            verification=AccountVerification.from_dict(pick(data, 'verification', default={})),
            limits=AccountLimits.from_dict(pick(data, 'limits', default={})),
            created_at=parse_datetime(pick(data, 'created_at', 'createdAt')) or _now(),
        )


@dataclass(frozen=True)
class MediaFile:
    """An uploaded MMS attachment"""

    id: str = ''
    url: str = ''
    content_type: str = ''
    size_bytes: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MediaFile":
        return cls(
            id=pick(data, 'id', default=''),
            url=pick(data, 'url', default=''),
            content_type=pick(data, 'content_type', 'contentType', default=''),
            size_bytes=int(pick(data, 'size_bytes', 'sizeBytes', default=0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'url': self.url,
            'content_type': self.content_type,
            'size_bytes': self.size_bytes,
        }
