from .import_extractor import ImportExtractor, extract_imports, calculate_complexity, count_loc

__all__ = ['ImportExtractor', 'extract_imports', 'calculate_complexity', 'count_loc']
