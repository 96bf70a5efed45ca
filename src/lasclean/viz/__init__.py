# src/lasclean/viz/__init__.py
