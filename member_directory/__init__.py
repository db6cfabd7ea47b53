"""Member directory service: member records with job-type rules over MongoDB."""
