"""
Core Package.

Contains the rewrite pass and its collaborators:
- Transform Engine
- Rewriter and Mixins
- File Content Resolver
- Host Plugin Entrypoint
- Marker Scanner
"""
