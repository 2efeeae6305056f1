from enum import Enum


class UserRole(str, Enum):
    USER = "user"
    ORGANIZER = "organizer"
    ADMIN = "admin"


class EventCategory(str, Enum):
    CONFERENCE = "conference"
    WORKSHOP = "workshop"
    SEMINAR = "seminar"
    CONCERT = "concert"
    SPORTS = "sports"
    OTHER = "other"


class EventPrivacy(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    INVITE_ONLY = "invite-only"


class TicketType(str, Enum):
    REGULAR = "regular"
    VIP = "vip"
    EARLY_BIRD = "early-bird"
    STUDENT = "student"
    SENIOR = "senior"


class RegistrationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


# Registrations holding ticket capacity
ACTIVE_REGISTRATION_STATUSES = (
    RegistrationStatus.PENDING.value,
    RegistrationStatus.CONFIRMED.value,
)


class PaymentMethod(str, Enum):
    STRIPE = "stripe"
    PAYPAL = "paypal"
    CREDIT_CARD = "credit_card"


class QAStatus(str, Enum):
    PENDING = "pending"
    ANSWERED = "answered"
    REJECTED = "rejected"


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"


class NotificationAudience(str, Enum):
    DIRECT = "direct"
    BROADCAST = "broadcast"
