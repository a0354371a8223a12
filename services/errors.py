# Custom exceptions raised by the resume pipeline.
# status_code is what the route answers with.


class PipelineError(Exception):
    status_code = 500


class FileDownloadError(PipelineError):
    status_code = 502


class ModelServiceError(PipelineError):
    status_code = 502


class PersistenceError(PipelineError):
    status_code = 500


class ConfigurationError(PipelineError):
    status_code = 500
