"""
Data Collection Module
URL builders, page parsers, identity resolution and orchestration

Note: do not import subpackages here to keep package import side-effect free.
Import needed functions directly from their modules.
"""

__all__: list[str] = []
