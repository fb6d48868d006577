"""Small systems-programming exercises: a stack machine, a memory manager, a tiny shell, a system greeting, a park ride simulation and tiny file system structures."""

__version__ = "0.1.0"