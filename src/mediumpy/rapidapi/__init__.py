from mediumpy.rapidapi.medium import Medium

__all__ = [
    "Medium",
]
