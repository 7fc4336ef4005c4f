"""Display helpers for the dashboard tables."""

RUPEE = "₹"


def format_price(value: float | None) -> str:
    """Format an amount in rupees with Indian digit grouping."""
    if value is None:
        return "-"
    amount = round(float(value))
    sign = "-" if amount < 0 else ""
    digits = str(abs(amount))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join([*groups, tail])
    return f"{sign}{RUPEE}{digits}"
