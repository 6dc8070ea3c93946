"""Project download endpoints.

- GET /api/download - Generate a project and return it as a zip archive
- GET /d - Short alias of /api/download, used in shared links

Query parameters:
    g: groupId, a: artifactId, v: version, c: className, p: path,
    b: build tool, e: extension ids (repeated or comma separated),
    s: dot separated short ids, ne: skip example code.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi import status as http_status

from code_quarkus.errors import (
    IO_ERROR,
    ArchiveError,
    GenerationError,
    InvalidInputError,
    WorkspaceError,
)
from code_quarkus.projects.archive import compute_archive_hash
from code_quarkus.projects.service import ProjectService
from web.deps import get_project_service

logger = logging.getLogger(__name__)

router = APIRouter()

ZIP_MEDIA_TYPE = "application/zip"


@router.get("/api/download", response_class=Response)
@router.get("/d", response_class=Response, include_in_schema=False)
def download_endpoint(
    g: str | None = Query(None, description="groupId"),
    a: str | None = Query(None, description="artifactId"),
    v: str | None = Query(None, description="version"),
    c: str | None = Query(None, description="className"),
    p: str | None = Query(None, description="path"),
    b: str | None = Query(None, description="Build tool (MAVEN, GRADLE, ...)"),
    e: list[str] | None = Query(None, description="Extension ids"),
    s: str | None = Query(None, description="Dot separated extension short ids"),
    ne: str | None = Query(None, description="Skip example code"),
    service: ProjectService = Depends(get_project_service),
) -> Response:
    """Generate a project and return it as a zip archive.

    Returns:
        Zip archive named after the artifactId.

    Raises:
        HTTPException: 400 on invalid input, 500 on generation failure.
    """
    try:
        definition = service.parse_definition(
            group_id=g,
            artifact_id=a,
            version=v,
            class_name=c,
            path=p,
            build_tool=b,
            extensions=e,
            short_extensions=s,
            no_examples=ne,
        )
        content = service.create(definition)
    except InvalidInputError as err:
        logger.info("Rejected download request: %s", err.message)
        raise HTTPException(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            detail=err.to_dict(),
        ) from None
    except (GenerationError, ArchiveError, WorkspaceError) as err:
        logger.error("Project creation failed: %s", err.message)
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "code": err.code,
                "message": "Error during project creation",
            },
        ) from None
    except OSError as err:
        logger.error("I/O error during project creation: %s", err)
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "code": IO_ERROR,
                "message": "Error during project creation",
            },
        ) from None

    return Response(
        content=content,
        media_type=ZIP_MEDIA_TYPE,
        headers={
            "Content-Disposition": (
                f'attachment; filename="{definition.artifact_id}.zip"'
            ),
            "ETag": f'"{compute_archive_hash(content)}"',
        },
    )
