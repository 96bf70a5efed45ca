# src/lasclean/cli/__init__.py
