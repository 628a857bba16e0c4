import asyncio
from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPolicy:
    """
    Fixed-interval polling budget.

    interval_seconds * max_attempts is the total time a resource gets to
    become ready.
    """

    interval_seconds: float = 5.0
    max_attempts: int = 60

    @property
    def budget_seconds(self) -> float:
        return self.interval_seconds * self.max_attempts

    def attempts(self):
        return range(1, self.max_attempts + 1)

    async def wait(self, attempt: int) -> None:
        await asyncio.sleep(self.interval_seconds)
