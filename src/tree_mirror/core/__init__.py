"""Core business logic modules for the tree mirroring application.

This package contains the synchronization engine organized by concern:
- filesystem: Low-level delete, force-delete, and timestamp operations
- sync: Tree diffing, task queue, execution, and progress reporting
"""

__all__: list[str] = []
