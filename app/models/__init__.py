"""
Инициализация моделей - избегаем циклических импортов
"""
from app.models.database import Base
from app.models.sample import MinerSample

__all__ = ['Base', 'MinerSample']
