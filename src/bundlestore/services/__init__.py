"""Service layer — application operations returning ServiceResult."""
