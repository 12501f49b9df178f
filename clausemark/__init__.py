"""
clausemark - Contract Markup transformation and template parsing

Converts legal-contract documents between structured tree representations and
compiles contract templates into parsers that recover typed data from filled-in
contract text.

Architecture:
- Markup Context: Document node model and tree visitors (pdfmake, markdown, plaintext)
- Templating Context: Template grammar, parser combinators, compiler and drafter
- Transform Context: Format registry, converters and explicit conversion chains
"""

__version__ = "0.1.0"
