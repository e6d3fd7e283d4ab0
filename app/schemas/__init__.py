from app.schemas.application import ApplicationRequest, ApplicationCreatedResponse
from app.schemas.auth import LoginRequest, LoginUser, LoginResponse, MessageResponse
from app.schemas.instance import InstanceCredentials, InstanceCreatedResponse
