# src/lasclean/utils/__init__.py
