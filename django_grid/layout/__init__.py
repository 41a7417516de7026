from .content import Column, Content, Row

__all__ = ["Content", "Row", "Column"]
