"""
gs1scan：GS1 扫码解析服务。

- services：GTIN 校验 / 效期归一 / 字段映射 / 扫码编排
- utils.gs1：默认的 GS1 元素串解释器（可替换）
- api + main：HTTP 出口
"""

__all__ = []
