"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidExpenseError(DomainException):
    """Expense amount is not a non-negative integer of minor units"""

    pass


class UnresolvedPayerError(DomainException):
    """Expense payer matches no current group member"""

    def __init__(self, expense_id: str):
        super().__init__(f"Payer not found for expense {expense_id}")
        self.expense_id = expense_id


class MemberNotFoundError(DomainException):
    """Referenced member is not part of the group"""

    pass


class InvalidPaymentError(DomainException):
    """Proposed payment does not match an outstanding debt"""

    pass
