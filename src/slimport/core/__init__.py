"""
Core Package.

Contains the rewrite logic:
- Rewrite Engine
- Import Rewriter and its Mixins
- Import Scanners
"""
