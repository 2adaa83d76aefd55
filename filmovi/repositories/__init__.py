# Repositories package init
"""
Filmovi API — Storage Layer
============================

What:  Classes that turn logical operations into parameterized SQL.
Who:   Route handlers receive them through filmovi.dependencies.
"""
