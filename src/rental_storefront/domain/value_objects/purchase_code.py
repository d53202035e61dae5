class PurchaseCode(str):
    """Value Object for an externally issued purchase code (trimmed, non-empty)."""
    def __new__(cls, value: str) -> "PurchaseCode":
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("Purchase code must not be empty")
        return str.__new__(cls, cleaned)
