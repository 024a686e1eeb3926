"""Bulk Update Outcome — pure accumulation of per-order results.

Invariants:
    - Every input id lands in exactly one of results / errors
    - success_count + error_count == number of ids processed
    - The response body always reports partial failure; the HTTP status stays 200
"""

from dataclasses import dataclass, field


@dataclass
class BulkUpdateOutcome:
    results: list[dict] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)

    def record_success(self, order_id: str, order: dict) -> None:
        self.results.append({"orderId": order_id, "success": True, "order": order})

    def record_failure(self, order_id: str, message: str) -> None:
        self.errors.append({"orderId": order_id, "success": False, "error": message})

    @property
    def success_count(self) -> int:
        return len(self.results)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def to_response(self) -> dict:
        body = {
            "message": (
                f"Bulk update completed: {self.success_count} successful, "
                f"{self.error_count} failed"
            ),
            "successCount": self.success_count,
            "errorCount": self.error_count,
            "results": self.results,
        }
        if self.errors:
            body["errors"] = self.errors
        return body
