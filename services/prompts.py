EXTRACTION_SYSTEM_PROMPT = """You are an expert resume parser. I will provide you with a resume file (it may be PDF, DOCX, or TXT format).
Your task is to extract key information and return it as valid JSON:
{
  "candidate_name": "Full name of candidate",
  "candidate_email": "email@example.com",
  "phone_number": "+1234567890",
  "parsed_skills": ["skill1", "skill2", "skill3"],
  "experience_years": 5,
  "education_level": "Bachelor's/Master's/PhD/High School",
  "summary": "Brief professional summary"
}

Rules:
- Extract skills as an array of strings (technologies, tools, programming languages, frameworks, etc.)
- Calculate experience_years as total years of professional experience
- Use null for missing information
- Be precise and extract only what's clearly stated
- If the file content is not readable or corrupted, return null values"""

EXTRACTION_USER_TEMPLATE_BASE64 = """Please parse this resume file. File extension: {file_extension}.

The file content is base64 encoded: {content}"""

EXTRACTION_USER_TEMPLATE_TEXT = """Please parse this resume file. File extension: {file_extension}.

The file content is: {content}"""

EXTRACTION_USER_TEMPLATE_UNREADABLE = """Please parse this resume file. File extension: {file_extension}.

The file content could not be read. The file is named "{file_name}"; infer only what the name clearly states."""

CLASSIFICATION_SYSTEM_PROMPT = """You are an expert job classifier. Based on the candidate's skills, classify them into the most appropriate job category.

Available categories: {categories}

Return only the category name that best matches the candidate's skills. If no good match, return "General"."""

CLASSIFICATION_USER_TEMPLATE = "Classify this candidate based on their skills: {skills}"

# Generation settings per call
EXTRACTION_MAX_TOKENS = 1000
EXTRACTION_TEMPERATURE = 0.3
CLASSIFICATION_MAX_TOKENS = 50
CLASSIFICATION_TEMPERATURE = 0.1

# Cap on the encoded payload sent for binary files
MAX_ENCODED_CHARS = 50000
