"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Services orchestrate repositories and hold the rules that span more
    than one entity (e.g. a comment and the post it belongs to).
    """

    pass
