# gs1scan/api/__init__.py
"""
API package bootstrap.

- 这里不做任何重导出
- 路由聚合由 `gs1scan/main.py` 负责
"""

__all__ = []
