# Contact Manager: contact form submissions over a FastAPI + MongoDB backend
