"""
Exceptions raised by the lease compliance engine
"""


class LeaseAccountingError(Exception):
    """Base class for calculation failures"""


class InvalidLeaseParameters(LeaseAccountingError, ValueError):
    """Lease economics that cannot produce a meaningful schedule"""

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("Invalid lease parameters: " + "; ".join(self.errors))


class UnsupportedStandard(LeaseAccountingError, ValueError):
    """Accounting standard selector other than ASC842 or IFRS16"""

    def __init__(self, standard):
        self.standard = standard
        super().__init__(f"Unsupported accounting standard: {standard!r}. Use ASC842 or IFRS16")
