"""
Test Fixtures

Common test classes used across test modules. They live at module level
so annotations resolve and dotted paths such as ``"fixtures.Database"``
can be imported.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional, Protocol


class Database:
    """Test database class"""

    def __init__(self):
        self.name = "TestDB"


class CacheService:
    """Test cache service"""

    def __init__(self):
        self.cache = {}


class UserRepository:
    """Test repository with dependencies"""

    def __init__(self, db: Database, cache: CacheService):
        self.db = db
        self.cache = cache


class SqlRepository(UserRepository):
    """Subclass used as an alias target"""
    pass


class Greeter:
    """Request handler built from a scalar"""

    def __init__(self, name: str):
        self.name = name

    def __call__(self, request):
        return f"Hello {self.name}"


class Widget:
    """Service built from an int"""

    def __init__(self, count: int):
        self.count = count


class Holder:
    """Wraps a single injected value"""

    def __init__(self, value: Any):
        self.value = value


class ServiceWithoutHint:
    """Service with missing type hint - for error testing"""

    def __init__(self, dependency):  # No type hint!
        self.dependency = dependency


class ServiceWithOptional:
    def __init__(self, db: Optional[Database], cache: CacheService | None):
        self.db = db
        self.cache = cache


class ServiceWithDefault:
    def __init__(self, db: Database, name: str = "default", cache: Optional[CacheService] = None):
        self.db = db
        self.name = name
        self.cache = cache


class ServiceWithKeywordOnly:
    def __init__(self, db: Database, *, cache: CacheService):
        self.db = db
        self.cache = cache


class ServiceWithVarArgs:
    def __init__(self, db: Database, *args: CacheService, **kwargs: Any):
        self.db = db
        self.args = args


class ServiceWithUnion:
    def __init__(self, backend: Database | CacheService):
        self.backend = backend


class ServiceWithList:
    def __init__(self, items: List[int]):
        self.items = items


class BaseService:
    pass


class MidService(BaseService):
    pass


class LeafService(MidService):
    pass


class ServiceA:
    """Half of a circular dependency"""

    def __init__(self, b: "ServiceB"):
        self.b = b


class ServiceB:
    """Other half of a circular dependency"""

    def __init__(self, a: ServiceA):
        self.a = a


class AbstractHandler(ABC):
    @abstractmethod
    def __call__(self, request):
        pass


class HandlerProtocol(Protocol):
    def __call__(self, request) -> Any:
        ...


class ConcreteHandler(AbstractHandler):
    def __call__(self, request):
        return "concrete"


class Dsn(Protocol):
    """Protocol without runtime checks"""

    def connect(self) -> Any:
        ...


class Color(Enum):
    RED = "red"


class PingHandler:
    def __call__(self, request):
        return "pong"


class RepositoryHandler:
    """Handler with an autowired dependency graph"""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    def __call__(self, request):
        return self.repository.db.name


class ExclaimMiddleware:
    def __call__(self, request, next):
        return next(request) + "!"


class NotAHandler:
    pass


class Level1:
    """First level of nested dependencies"""
    pass


class Level2:
    """Second level of nested dependencies"""

    def __init__(self, l1: Level1):
        self.l1 = l1


class Level3:
    """Third level of nested dependencies"""

    def __init__(self, l2: Level2):
        self.l2 = l2


class Level4:
    """Fourth level of nested dependencies"""

    def __init__(self, l3: Level3):
        self.l3 = l3
