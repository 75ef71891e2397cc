"""서비스 패키지 — 비즈니스 규칙 계층.

Service package — Business rule layer.
Services validate and authorize before any repository write, and translate
repository failures into ServiceError. They hold no state between calls.
"""
