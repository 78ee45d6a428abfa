"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services own the rules that span several rows: counters, reply
    placement, authorization. They receive an open unit of work or a
    transaction runner and never hold store state of their own.
    """

    pass
