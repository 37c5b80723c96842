"""
twostate core: lexer, declaration parser, IR, validation and configuration.
"""
