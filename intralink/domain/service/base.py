"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the collaboration rules that span several
    entities: visibility, the request lifecycle, ranking and availability.
    """

    pass
