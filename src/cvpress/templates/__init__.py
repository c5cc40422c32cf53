"""CV and cover letter templates."""
