from .local_codebase_scanner import LocalCodebaseScanner, EXTENSION_LANGUAGES

__all__ = ['LocalCodebaseScanner', 'EXTENSION_LANGUAGES']
