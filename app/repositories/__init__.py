"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
BaseRepository provides generic reads and creates; MemberRepository adds the
dynamic search predicates and paging strategies; TeamRepository adds name lookups.
"""
