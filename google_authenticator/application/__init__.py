from .dto import CodePreview, Enrollment, EnrollInput, GenerateCodeInput, VerifyCodeInput
from .use_cases import EnrollUseCase, GenerateCodeUseCase, VerifyCodeUseCase, parse_instant

__all__ = [
    "CodePreview",
    "EnrollInput",
    "EnrollUseCase",
    "Enrollment",
    "GenerateCodeInput",
    "GenerateCodeUseCase",
    "VerifyCodeInput",
    "VerifyCodeUseCase",
    "parse_instant",
]
