from .customer import Customer
from .notification_status import NotificationStatus
from .service_type import ServiceType
from .setting import Setting
