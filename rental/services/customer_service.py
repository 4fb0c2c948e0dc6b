"""
Customer Registry

Customer records keyed by a unique driver's license number.
"""
from typing import List, Optional

from rental.core.exceptions import ConflictError, NotFoundError, ValidationError
from rental.core.locks import Deadline, KeyedLock, customer_key, license_key
from rental.models.customer import Customer
from rental.repositories.base import CustomerRepository
from rental.services.booking_ledger import BookingLedger


class CustomerRegistry:
    """Service for customer records"""

    def __init__(
        self,
        repository: CustomerRepository,
        ledger: BookingLedger,
        locks: KeyedLock,
        default_timeout: Optional[float] = None
    ):
        self.repository = repository
        self.ledger = ledger
        self.locks = locks
        self.default_timeout = default_timeout

    async def add_customer(self, name: str, contact_info: str, license_number: str) -> int:
        """
        Register a customer.

        Raises:
            ValidationError: If any field is empty
            ConflictError: If the license number is already registered
        """
        customer = self._build(name, contact_info, license_number)
        deadline = self._deadline()
        async with self.locks.hold(license_key(customer.license_number), deadline=deadline):
            await self._ensure_license_free(customer.license_number)
            deadline.check()
            stored = await self.repository.add(customer)
        return stored.id

    async def update_customer(self, customer_id: int, name: str, contact_info: str, license_number: str) -> None:
        changes = self._build(name, contact_info, license_number)
        deadline = self._deadline()
        async with self.locks.hold(
            customer_key(customer_id),
            license_key(changes.license_number),
            deadline=deadline
        ):
            current = await self.get(customer_id)
            await self._ensure_license_free(changes.license_number, customer_id)
            deadline.check()
            await self.repository.update(current.model_copy(update={
                "name": changes.name,
                "contact_info": changes.contact_info,
                "license_number": changes.license_number,
            }))

    async def remove_customer(self, customer_id: int, timeout: Optional[float] = None) -> None:
        """
        Delete a customer without Active bookings.

        Raises:
            NotFoundError: If the customer does not exist
            ConflictError: While the customer has Active bookings
        """
        deadline = self._deadline(timeout)
        async with self.locks.hold(customer_key(customer_id), deadline=deadline):
            await self.get(customer_id)
            active = await self.ledger.list_active_by_customer(customer_id)
            if active:
                raise ConflictError(
                    f"Customer {customer_id} has {len(active)} active booking(s) and cannot be removed"
                )
            deadline.check()
            await self.repository.delete(customer_id)

    async def get(self, customer_id: int) -> Customer:
        customer = await self.repository.get(customer_id)
        if customer is None:
            raise NotFoundError(f"Customer {customer_id} not found")
        return customer

    async def find_by_license(self, license_number: str) -> Customer:
        customer = await self.repository.find_by_license(_normalize_license(license_number))
        if customer is None:
            raise NotFoundError(f"No customer with license number '{license_number}'")
        return customer

    async def list(self) -> List[Customer]:
        return await self.repository.list()

    async def _ensure_license_free(self, license_number: str, customer_id: Optional[int] = None) -> None:
        holder = await self.repository.find_by_license(license_number)
        if holder is not None and holder.id != customer_id:
            raise ConflictError(f"License number '{license_number}' is already registered")

    def _deadline(self, timeout: Optional[float] = None) -> Deadline:
        return Deadline(timeout if timeout is not None else self.default_timeout)

    @staticmethod
    def _build(name: str, contact_info: str, license_number: str) -> Customer:
        name = str(name or "").strip()
        contact_info = str(contact_info or "").strip()
        license_number = _normalize_license(license_number)
        if not name:
            raise ValidationError("Customer name is required")
        if not contact_info:
            raise ValidationError("Contact info is required")
        if not license_number:
            raise ValidationError("License number is required")
        return Customer(name=name, contact_info=contact_info, license_number=license_number)


def _normalize_license(license_number: str) -> str:
    return str(license_number or "").strip().upper()
