"""
Declarative base shared by all Shopfront models.
"""
from sqlalchemy.orm import declarative_base

Base = declarative_base()
