"""Services: orchestration that wires core logic to adapters."""
