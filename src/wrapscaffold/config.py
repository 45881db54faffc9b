import os


class Config:
    # Binding that receives the call-through result in every wrapper
    RESULT_NAME = os.environ.get("WRAPSCAFFOLD_RESULT_NAME", "python_function_result")
    INDENT = int(os.environ.get("WRAPSCAFFOLD_INDENT", "2"))
    DOC_PREFIX = "#'"
