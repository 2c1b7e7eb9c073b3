"""
prisma-casemap

Normalizes identifier casing in a Prisma schema while keeping the database
names through @map/@@map annotations.
"""

from .pipeline import SchemaPipeline, run
from .transformer import NamingTransformer, TransformOptions, transform_names

__version__ = "0.1.0"

__all__ = [
    'SchemaPipeline',
    'run',
    'NamingTransformer',
    'TransformOptions',
    'transform_names',
]
