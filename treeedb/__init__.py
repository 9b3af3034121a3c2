"""Datalog facts from syntax trees and Soufflé declarations from tree-sitter node types."""

__version__ = "0.1.0"