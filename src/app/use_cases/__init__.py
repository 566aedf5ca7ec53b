"""
Use Cases

Organized by domain folder:
- auth/: Registration, login and password reset flows
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    ForgotPasswordUseCase,
    ResetPasswordUseCase,
    LoadAccountUseCase,
)

__all__ = [
    "RegisterUseCase",
    "LoginUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    "LoadAccountUseCase",
]
