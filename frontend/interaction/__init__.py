from .temporal import DateWindow

__all__ = ['DateWindow']
