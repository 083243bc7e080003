"""
Command-line interface entry points for hebword.

Entry points:
- hebword classify: Classify words from arguments or stdin
- hebword build: Build a dictionary trie from a lexicon file
"""
