from .entity import AggregateRoot as AggregateRoot
from .entity import Entity as Entity
from .exception import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exception import (
    DomainException as DomainException,
)
from .exception import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exception import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .exception import (
    TransactionConflictException as TransactionConflictException,
)
from .repository import KeyValueStore as KeyValueStore
from .repository import Repository as Repository
from .repository import Transaction as Transaction
from .value_object import (
    Currency as Currency,
)
from .value_object import (
    IsoDateTime as IsoDateTime,
)
from .value_object import (
    Money as Money,
)
from .value_object import (
    TripKey as TripKey,
)
