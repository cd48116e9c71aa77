"""DevSecOps showcase: backend status API and server-rendered marketing site."""
