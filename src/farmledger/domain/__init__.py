"""Domain layer for farmledger application.

Services are imported lazily so that the database layer can import
``farmledger.domain.entities`` without pulling in the services that depend
on it.
"""

_SERVICES = {
    "ActivityLogService": "farmledger.domain.activity_log",
    "AreaService": "farmledger.domain.area",
    "CoprasService": "farmledger.domain.copras",
    "DashboardService": "farmledger.domain.dashboard",
    "FishpondService": "farmledger.domain.fishpond",
    "RentalService": "farmledger.domain.rental",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        module = importlib.import_module(_SERVICES[name])
        return getattr(module, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
