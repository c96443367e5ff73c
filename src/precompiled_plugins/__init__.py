"""Precompiled script plugins for DSL build scripts.

The `precompiled_plugins` package turns build scripts living in regular
source sets into plugins that can be applied by identifier.

Key features:
- plugin identifiers derived from the script file name and its declared
  package, found with a shallow token scan instead of a full parse;
- generated wrapper sources bridging the plugin contract to the
  compiled script class;
- task wiring that generates wrappers before compilation and declares
  plugins before descriptors are published.
"""
