# backend/geoattend/utils/swagger.py
"""Swagger/OpenAPI configuration for the application."""

# Swagger UI configuration
SWAGGER_URL = '/api/docs'
API_URL = '/api/swagger.json'

def _body(required, **properties):
    return {
        "required": True,
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "required": required,
                    "properties": properties
                }
            }
        }
    }

def _responses(success_code="200", **errors):
    responses = {
        success_code: {
            "description": "Success",
            "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Success"}}}
        }
    }
    for code, description in errors.items():
        responses[code.lstrip('_')] = {
            "description": description,
            "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Error"}}}
        }
    return responses

_string = {"type": "string"}
_number = {"type": "number"}
_integer = {"type": "integer"}
_secured = [{"bearerAuth": []}]

def generate_swagger_spec():
    """Generate OpenAPI/Swagger specification."""
    return {
        "openapi": "3.0.0",
        "info": {
            "title": "GeoAttend API",
            "description": "Device-bound, geofenced attendance windows for courses",
            "version": "1.0.0"
        },
        "servers": [
            {
                "url": "http://127.0.0.1:5000/api",
                "description": "Development server"
            }
        ],
        "components": {
            "securitySchemes": {
                "bearerAuth": {
                    "type": "http",
                    "scheme": "bearer",
                    "bearerFormat": "JWT"
                }
            },
            "schemas": {
                "AttendanceWindow": {
                    "type": "object",
                    "properties": {
                        "id": _integer,
                        "course_id": _integer,
                        "latitude": _number,
                        "longitude": _number,
                        "radius_meters": _integer,
                        "start_time": {"type": "string", "format": "date-time"},
                        "end_time": {"type": "string", "format": "date-time", "nullable": True},
                        "is_active": {"type": "boolean"}
                    }
                },
                "AttendanceRecord": {
                    "type": "object",
                    "properties": {
                        "id": _integer,
                        "window_id": _integer,
                        "student_id": _integer,
                        "timestamp": {"type": "string", "format": "date-time"},
                        "latitude": _number,
                        "longitude": _number
                    }
                },
                "Error": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean"},
                        "message": _string,
                        "status_code": _integer,
                        "distance": {"type": "number", "description": "Out-of-range only"},
                        "allowed_radius": {"type": "integer", "description": "Out-of-range only"},
                        "field": {"type": "string", "description": "Validation errors only"}
                    }
                },
                "Success": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean", "default": False},
                        "message": _string,
                        "data": {"type": "object"}
                    }
                }
            }
        },
        "paths": {
            "/auth/login": {
                "post": {
                    "tags": ["Authentication"],
                    "summary": "Login bound to a device",
                    "requestBody": _body(
                        ["username", "password", "role", "deviceId"],
                        username=_string,
                        password=_string,
                        role={"type": "string", "enum": ["student", "lecturer"]},
                        deviceId=_string
                    ),
                    "responses": _responses(
                        _400="Validation error",
                        _401="Invalid credentials",
                        _409="Active session on another device"
                    )
                }
            },
            "/auth/logout": {
                "post": {
                    "tags": ["Authentication"],
                    "summary": "Release the device session",
                    "security": _secured,
                    "responses": _responses()
                }
            },
            "/auth/onboard": {
                "post": {
                    "tags": ["Authentication"],
                    "summary": "Set a student's first password",
                    "requestBody": _body(
                        ["indexNumber", "newPassword"],
                        indexNumber=_string,
                        newPassword=_string
                    ),
                    "responses": _responses(
                        _400="Validation error or already registered",
                        _404="Index number not found"
                    )
                }
            },
            "/auth/me": {
                "get": {
                    "tags": ["Authentication"],
                    "summary": "Current identity",
                    "security": _secured,
                    "responses": _responses(_401="Unauthorized or device mismatch")
                }
            },
            "/courses": {
                "get": {
                    "tags": ["Courses"],
                    "summary": "List courses",
                    "security": _secured,
                    "responses": _responses(_401="Unauthorized")
                },
                "post": {
                    "tags": ["Courses"],
                    "summary": "Create a course owned by the caller",
                    "security": _secured,
                    "requestBody": _body(["code", "name"], code=_string, name=_string),
                    "responses": _responses(
                        "201",
                        _400="Validation error or duplicate code",
                        _403="Lecturers only"
                    )
                }
            },
            "/windows": {
                "post": {
                    "tags": ["Attendance Windows"],
                    "summary": "Open an attendance window",
                    "security": _secured,
                    "requestBody": _body(
                        ["courseId", "latitude", "longitude", "radiusMeters"],
                        courseId=_integer,
                        latitude=_number,
                        longitude=_number,
                        radiusMeters=_integer
                    ),
                    "responses": _responses("201", _400="Validation error", _403="Lecturers only")
                }
            },
            "/windows/active": {
                "get": {
                    "tags": ["Attendance Windows"],
                    "summary": "List active windows with course",
                    "security": _secured,
                    "responses": _responses(_401="Unauthorized")
                }
            },
            "/windows/{window_id}/stop": {
                "post": {
                    "tags": ["Attendance Windows"],
                    "summary": "Stop a window",
                    "security": _secured,
                    "parameters": [
                        {"name": "window_id", "in": "path", "required": True, "schema": _integer}
                    ],
                    "responses": _responses(_403="Lecturers only", _404="Window not found")
                }
            },
            "/windows/{window_id}/records": {
                "get": {
                    "tags": ["Attendance Windows"],
                    "summary": "Attendance report for a window",
                    "security": _secured,
                    "parameters": [
                        {"name": "window_id", "in": "path", "required": True, "schema": _integer}
                    ],
                    "responses": _responses(_403="Lecturers only", _404="Window not found")
                }
            },
            "/attendance": {
                "post": {
                    "tags": ["Attendance"],
                    "summary": "Mark attendance",
                    "security": _secured,
                    "requestBody": _body(
                        ["windowId", "lat", "lng", "deviceId"],
                        windowId=_integer,
                        lat=_number,
                        lng=_number,
                        deviceId=_string
                    ),
                    "responses": _responses(
                        "201",
                        _400="Window inactive, out of range or validation error",
                        _401="Device mismatch",
                        _403="Students only",
                        _404="Window not found",
                        _409="Attendance already marked"
                    )
                }
            },
            "/attendance/history": {
                "get": {
                    "tags": ["Attendance"],
                    "summary": "Current student's history",
                    "security": _secured,
                    "responses": _responses(_403="Students only")
                }
            },
            "/students/import": {
                "post": {
                    "tags": ["Students"],
                    "summary": "Bulk provision students",
                    "security": _secured,
                    "requestBody": _body(
                        ["students"],
                        students={
                            "type": "array",
                            "items": {
                                "type": "object",
                                "properties": {"indexNumber": _string, "name": _string}
                            }
                        }
                    ),
                    "responses": _responses(_400="Validation error", _403="Lecturers only")
                }
            }
        }
    }
