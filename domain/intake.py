from typing import Optional

from domain.errors import UnsupportedFileTypeError
from domain.schemas import FileStatus, UploadedFile
from infra.pdf.parser import PDF_MIME_TYPE

EXAMPLE_JOB_DESCRIPTION = """We are looking for a Frontend Developer to join our team.

Requirements:
• 3+ years of experience with React and JavaScript
• Strong knowledge of HTML, CSS, and responsive design
• Experience with modern build tools and version control
• Understanding of RESTful APIs and state management
• Team collaboration and communication skills

Responsibilities:
• Develop and maintain user interfaces
• Collaborate with designers and backend developers
• Optimize applications for maximum speed and scalability
• Participate in code reviews and team meetings

Nice to have:
• Experience with TypeScript
• Knowledge of Node.js and databases
• Familiarity with cloud platforms (AWS, Azure)
• Understanding of testing frameworks"""


class FileIntake:
    """Single-slot holder for the uploaded CV and its extracted text."""

    def __init__(self):
        self.status = FileStatus.EMPTY
        self.uploaded: Optional[UploadedFile] = None
        self.error: Optional[str] = None

    @property
    def text(self) -> str:
        return self.uploaded.extracted_text if self.uploaded else ""

    @property
    def processing(self) -> bool:
        return self.status == FileStatus.PROCESSING

    @staticmethod
    def check_type(content_type: Optional[str]) -> None:
        if (content_type or "").split(";")[0].strip().lower() != PDF_MIME_TYPE:
            raise UnsupportedFileTypeError("Please upload a PDF file only")

    def begin(self) -> None:
        self.status = FileStatus.PROCESSING
        self.uploaded = None
        self.error = None

    def complete(self, uploaded: UploadedFile) -> None:
        self.status = FileStatus.UPLOADED
        self.uploaded = uploaded
        self.error = None

    def fail(self, message: str) -> None:
        self.status = FileStatus.ERROR
        self.uploaded = None
        self.error = message

    def remove(self) -> None:
        self.status = FileStatus.EMPTY
        self.uploaded = None
        self.error = None


class JobDescriptionIntake:
    def __init__(self, text: str = ""):
        self.text = text

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def ready(self) -> bool:
        return self.length > 0

    def set(self, text: str) -> None:
        self.text = text

    def clear(self) -> None:
        self.text = ""
