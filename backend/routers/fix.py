"""Fix mode API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool

from models.fix import CodeRequest, CustomEditRequest, FixErrorRequest, FixResponse
from services.config_manager import ConfigManager
from services.diff_generator import DiffGenerator, check_marker_free
from services.exceptions import EditSuggestionError, MalformedAnnotation, MarkerCollision
from services.llm_service import suggest_edit

router = APIRouter()
diff_generator = DiffGenerator()

LINT_INSTRUCTION = "Fix all the bugs in this code, if there are any."
OPTIMIZE_INSTRUCTION = "Optimize this code."
DOCUMENT_INSTRUCTION = "Add comments to this code."


def build_fix_error_instruction(stack_trace: str) -> str:
    """Instruction asking for a fix given a stack trace (line breaks removed)"""
    trace = stack_trace.replace("\r", "").replace("\n", "")
    return f"Propose a fix for the code given this Error StackTrace: {trace}"


async def propose_fix(code: str, instruction: str, file_path: str | None = None) -> FixResponse:
    """Request revised code from the provider and merge it into the submitted code"""
    config = ConfigManager.get_instance().get_config()

    # Merged documents sent back as code cannot be annotated again
    try:
        check_marker_free(code, "original")
    except MarkerCollision as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        revised = await suggest_edit(code, instruction, config)
    except EditSuggestionError as e:
        print(f"[Fix] Edit suggestion failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    # Diffing is CPU-bound; keep it off the event loop
    try:
        diff_result = await run_in_threadpool(diff_generator.generate_diff, code, revised, file_path or "code")
    except MarkerCollision as e:
        print(f"[Fix] Unusable revision: {e}")
        raise HTTPException(status_code=400 if e.side == "original" else 502, detail=str(e))
    except MalformedAnnotation as e:
        raise HTTPException(status_code=500, detail=f"Failed to annotate changes: {e}")

    return FixResponse(
        merged_code=diff_result.merged_code,
        code_changes=diff_result.code_changes,
        unified_diff=diff_result.unified_diff,
        preview_content=diff_result.preview_content,
        instruction=instruction,
        provider=config.get("provider", "openai"),
    )


@router.post("/error", response_model=FixResponse)
async def fix_error(request: FixErrorRequest) -> FixResponse:
    """Propose a fix for code that raised the given stack trace"""
    instruction = build_fix_error_instruction(request.stack_trace)
    return await propose_fix(request.code, instruction, request.file_path)


@router.post("/lint", response_model=FixResponse)
async def lint_code(request: CodeRequest) -> FixResponse:
    """Fix the bugs in the code"""
    return await propose_fix(request.code, LINT_INSTRUCTION, request.file_path)


@router.post("/optimize", response_model=FixResponse)
async def optimize_code(request: CodeRequest) -> FixResponse:
    """Optimize the code"""
    return await propose_fix(request.code, OPTIMIZE_INSTRUCTION, request.file_path)


@router.post("/document", response_model=FixResponse)
async def document_code(request: CodeRequest) -> FixResponse:
    """Add comments to the code"""
    return await propose_fix(request.code, DOCUMENT_INSTRUCTION, request.file_path)


@router.post("/custom", response_model=FixResponse)
async def custom_edit(request: CustomEditRequest) -> FixResponse:
    """Apply a free-form instruction to the code"""
    if not request.instruction.strip():
        raise HTTPException(status_code=400, detail="Instruction is required")
    return await propose_fix(request.code, request.instruction, request.file_path)
