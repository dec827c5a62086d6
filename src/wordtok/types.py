"""
Core types for tokenization.
"""

type Token = str
type TokenId = int
type ForwardVocab = dict[Token, TokenId]
type ReverseVocab = dict[TokenId, Token]
