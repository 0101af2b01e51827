# routers/__init__.py
from .health import router as health_router
from .properties import router as properties_router
from .tenants import router as tenants_router
from .tenancies import router as tenancies_router
from .rent_payments import router as rent_payments_router
from .expenses import router as expenses_router
from .sa_bookings import router as sa_bookings_router

__all__ = [
     "health_router",
     "properties_router",
     "tenants_router",
     "tenancies_router",
     "rent_payments_router",
     "expenses_router",
     "sa_bookings_router",
]
