import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from models import Reservation


class ReservationStore(ABC):
    """Append-only ordered collection of reservations plus the id counter.

    Mutations go through ``add`` so id assignment and append happen in one
    critical section; ``next_id`` and ``append`` stay public for callers that
    already hold ``lock``.
    """

    def __init__(self):
        self.lock = threading.RLock()

    @abstractmethod
    def next_id(self) -> int:
        ...

    @abstractmethod
    def append(self, reservation: Reservation) -> None:
        ...

    @abstractmethod
    def all(self) -> List[Reservation]:
        ...

    @abstractmethod
    def find_by_id(self, reservation_id: int) -> Optional[Reservation]:
        ...

    def add(self, build: Callable[[int], Reservation]) -> Reservation:
        """Assign the next id, build the record with it and append it atomically."""
        with self.lock:
            reservation = build(self.next_id())
            self.append(reservation)
            return reservation

    def __len__(self) -> int:
        return len(self.all())


class InMemoryReservationStore(ReservationStore):
    """Process-lifetime store. Contents are lost on restart."""

    def __init__(self):
        super().__init__()
        self._reservations: List[Reservation] = []
        self._next_id = 1

    def next_id(self) -> int:
        with self.lock:
            value = self._next_id
            self._next_id += 1
            return value

    def append(self, reservation: Reservation) -> None:
        with self.lock:
            self._reservations.append(reservation)

    def all(self) -> List[Reservation]:
        with self.lock:
            return list(self._reservations)

    def find_by_id(self, reservation_id: int) -> Optional[Reservation]:
        with self.lock:
            for r in self._reservations:
                if r.id == reservation_id:
                    return r
        return None

    def __len__(self) -> int:
        return len(self._reservations)
