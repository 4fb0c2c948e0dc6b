from beanie import Document


class CounterDocument(Document):
    """
    Named integer sequence.
    Hands out the numeric IDs of vehicles, customers, bookings and payments.
    """
    id: str
    value: int = 0

    class Settings:
        name = "counters"
