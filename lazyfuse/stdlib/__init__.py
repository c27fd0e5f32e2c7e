from .container import LazyContainer
