"""Cross-service building blocks: base service, DTOs, errors and ports."""
