"""
NameScout - Request Dependencies
Components are built once per app in ``create_app`` and kept on
``app.state``; routers reach them through these accessors so tests can
build isolated apps.
"""
from fastapi import Request

from namescout.middleware.rate_limit import get_client_identity
from namescout.services.ai_quota import AdmissionGate
from namescout.services.domain_checker import DomainChecker
from namescout.services.name_generator import NameGenerator
from namescout.services.social_checker import SocialChecker


def client_identity(request: Request) -> str:
    return get_client_identity(request.headers)


def get_admission_gate(request: Request) -> AdmissionGate:
    return request.app.state.admission_gate


def get_domain_checker(request: Request) -> DomainChecker:
    return request.app.state.domain_checker


def get_social_checker(request: Request) -> SocialChecker:
    return request.app.state.social_checker


def get_name_generator(request: Request) -> NameGenerator:
    return request.app.state.name_generator
