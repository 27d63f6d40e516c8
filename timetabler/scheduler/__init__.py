from .edit import edit_cell
from .generate import fill_schedule, generate, generate_with_audit

__all__ = ["edit_cell", "fill_schedule", "generate", "generate_with_audit"]
